"""Shared benchmark runtime helpers."""

from __future__ import annotations

import math
import os
import platform
import time
from typing import Any, Callable

import jax


def host_metadata() -> dict[str, Any]:
    return {
        "platform": platform.platform(),
        "python": platform.python_version(),
        "jax": getattr(jax, "__version__", "unknown"),
        "backend": jax.default_backend(),
        "cpu_count": os.cpu_count(),
    }


def block_until_ready(value: object) -> None:
    if hasattr(value, "block_until_ready"):
        value.block_until_ready()
        return
    if isinstance(value, (tuple, list)):
        for item in value:
            block_until_ready(item)


def mean(values: list[float]) -> float:
    return sum(values) / len(values)


def stddev(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    m = mean(values)
    var = sum((v - m) ** 2 for v in values) / (len(values) - 1)
    return math.sqrt(var)


def sample_ms(fn: Callable[[], object], *, repeats: int, warmup: int, samples: int) -> list[float]:
    for _ in range(max(0, warmup)):
        block_until_ready(fn())

    rows: list[float] = []
    for _ in range(samples):
        start_ns = time.perf_counter_ns()
        for _ in range(repeats):
            block_until_ready(fn())
        elapsed_ns = time.perf_counter_ns() - start_ns
        rows.append((elapsed_ns / repeats) / 1e6)
    return rows
