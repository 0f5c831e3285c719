"""Infinite arithmetic progressions.

``get`` evaluates the closed form ``start + step * index``; iteration walks the
progression by repeated addition. For exact element types (integers,
fractions) both agree everywhere. For floating-point types the iterated value
accumulates rounding error, so it matches ``get`` only approximately at large
indices.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from .arrays import InfiniteVector
from .elements import ElementType, check_index, coerce, dtype_of, from_index, one_of, resolve_dtype

T = TypeVar("T")


class ProgressionIterator(Iterator, Generic[T]):
    """Yields ``start, start + step, start + 2*step, ...`` by repeated addition."""

    __slots__ = ("_current", "_step")

    def __init__(self, start: T, step: T) -> None:
        self._current = start
        self._step = step

    def __iter__(self) -> ProgressionIterator[T]:
        return self

    def __next__(self) -> T:
        value = self._current
        self._current = self._current + self._step
        return value


class OneToInf(InfiniteVector[T]):
    """``1, 2, 3, ...`` in the requested element type."""

    def __init__(self, dtype=None) -> None:
        self.dtype = resolve_dtype(dtype)

    def get(self, index: int) -> T:
        return from_index(check_index(index) + 1, self.dtype)

    def iter(self) -> ProgressionIterator[T]:
        one = one_of(self.dtype)
        return ProgressionIterator(one, one)


class InfUnitRange(InfiniteVector[T]):
    """``start, start + 1, start + 2, ...``"""

    def __init__(self, start: T, dtype=None) -> None:
        self.dtype = dtype_of(start) if dtype is None else resolve_dtype(dtype)
        self.start = coerce(start, self.dtype)

    def get(self, index: int) -> T:
        i = check_index(index)
        if i == 0:
            return self.start
        return self.start + from_index(i, self.dtype)

    def iter(self) -> ProgressionIterator[T]:
        return ProgressionIterator(self.start, one_of(self.dtype))


class InfStepRange(InfiniteVector[T]):
    """``start, start + step, start + 2*step, ...``

    Without an explicit ``dtype`` the element type is the one ``start + step``
    promotes to, so ``InfStepRange(0, 0.5)`` is a float progression.
    """

    def __init__(self, start: T, step: T, dtype=None) -> None:
        self.dtype: ElementType = dtype_of(start + step) if dtype is None else resolve_dtype(dtype)
        self.start = coerce(start, self.dtype)
        self.step = coerce(step, self.dtype)

    def get(self, index: int) -> T:
        return self.start + self.step * from_index(check_index(index), self.dtype)

    def iter(self) -> ProgressionIterator[T]:
        return ProgressionIterator(self.start, self.step)
