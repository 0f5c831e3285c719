"""Per-index ``get`` cost for lazy arrays at exponentially increasing indices.

cumsum re-sums from index 0 on every call, so its cost should grow linearly
with the index; broadcast, elementwise and cached reads should stay flat.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable

from _bench_utils import host_metadata, mean, sample_ms, stddev

from infinite_arrays import CachedArray, InfiniteArray, OneToInf, Ones, add_arrays, broadcast, cumsum


@dataclass(frozen=True)
class GetCostSpec:
    name: str
    note: str
    build: Callable[[], InfiniteArray]


@dataclass(frozen=True)
class GetCostRow:
    index: int
    repeats: int
    mean_ms: float
    stddev_ms: float


def _cached_with_overrides() -> InfiniteArray:
    cached = CachedArray(OneToInf(int))
    for i in range(0, 1 << 20, 2):
        cached.set(i, -i)
    return cached


def _build_specs() -> list[GetCostSpec]:
    return [
        GetCostSpec(name="ones", note="constant read", build=lambda: Ones()),
        GetCostSpec(name="ones_float32", note="constant jax scalar read", build=lambda: Ones("float32")),
        GetCostSpec(name="cumsum", note="O(index) re-summation", build=lambda: cumsum(Ones())),
        GetCostSpec(name="broadcast", note="one fn call per read", build=lambda: broadcast(OneToInf(int), lambda x: x * x)),
        GetCostSpec(name="add_arrays", note="two reads per read", build=lambda: add_arrays(OneToInf(int), OneToInf(int))),
        GetCostSpec(name="cached", note="half the indices overridden", build=_cached_with_overrides),
    ]


def _powers_of_two(min_exp: int, max_exp: int) -> list[int]:
    if min_exp > max_exp:
        raise ValueError("minimum exponent cannot be greater than maximum exponent")
    return [1 << exp for exp in range(min_exp, max_exp + 1)]


def _repeats_for_index(spec: GetCostSpec, index: int, budget: int) -> int:
    if spec.name == "cumsum":
        return max(1, budget // (index + 1))
    return budget


def _run_spec(spec: GetCostSpec, indices: list[int], *, budget: int, samples: int) -> list[GetCostRow]:
    arr = spec.build()
    rows: list[GetCostRow] = []
    for index in indices:
        repeats = _repeats_for_index(spec, index, budget)
        timings = sample_ms(lambda: arr.get(index), repeats=repeats, warmup=1, samples=samples)
        rows.append(GetCostRow(index=index, repeats=repeats, mean_ms=mean(timings), stddev_ms=stddev(timings)))
    return rows


def _print_rows(spec: GetCostSpec, rows: list[GetCostRow]) -> None:
    title = f"{spec.name}: {spec.note}"
    print(title)
    print("-" * len(title))
    print(f"{'index':>10} {'repeats':>8} {'mean(ms)':>12} {'stddev':>10} {'growth':>8}")
    prev: float | None = None
    for row in rows:
        growth = "-" if prev is None or prev <= 0 else f"{row.mean_ms / prev:7.2f}x"
        print(f"{row.index:10d} {row.repeats:8d} {row.mean_ms:12.6f} {row.stddev_ms:10.6f} {growth:>8}")
        prev = row.mean_ms
    print()


def main() -> None:
    parser = argparse.ArgumentParser(description="Time InfiniteArray.get at exponentially increasing indices.")
    parser.add_argument("--min-exp", type=int, default=0, help="minimum index exponent (2^exp)")
    parser.add_argument("--max-exp", type=int, default=14, help="maximum index exponent (2^exp)")
    parser.add_argument("--budget", type=int, default=2000, help="get() calls per sample for O(1) arrays")
    parser.add_argument("--samples", type=int, default=5, help="timing samples per index")
    parser.add_argument("--json-out", default="", help="optional path to write machine-readable results")
    args = parser.parse_args()

    indices = _powers_of_two(args.min_exp, args.max_exp)
    payload_rows: list[dict[str, object]] = []
    for spec in _build_specs():
        rows = _run_spec(spec, indices, budget=args.budget, samples=args.samples)
        _print_rows(spec, rows)
        payload_rows.append({"spec": spec.name, "note": spec.note, "rows": [asdict(row) for row in rows]})

    if args.json_out:
        out = Path(args.json_out)
        out.parent.mkdir(parents=True, exist_ok=True)
        payload = {"host": host_metadata(), "indices": indices, "results": payload_rows}
        out.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        print(f"Wrote {out}")


if __name__ == "__main__":
    main()
