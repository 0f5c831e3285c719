"""Structured error types for capability and index failures."""

from __future__ import annotations


class InfiniteArrayError(Exception):
    """Base class for structured infinite-array errors."""


class ElementTypeError(InfiniteArrayError, TypeError):
    """Element type lacks a capability the array needs (identity, integer construction)."""

    def __init__(self, dtype: object, capability: str) -> None:
        self.dtype = dtype
        self.capability = capability
        super().__init__(f"element type {_dtype_name(dtype)} does not support {capability}")


class InfiniteIndexError(InfiniteArrayError, IndexError):
    """Index outside the non-negative index domain."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"infinite arrays are indexed from 0; got {index}")


class UnboundedLengthError(InfiniteArrayError, TypeError):
    """Operation would need a finite length."""


def _dtype_name(dtype: object) -> str:
    name = getattr(dtype, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(dtype)
