"""Lazily evaluated infinite arrays: the indexing abstraction and its basic implementations."""

from __future__ import annotations

import itertools
import numbers
import operator
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

import jax
import jax.numpy as jnp

from . import settings
from .elements import ElementType, as_python_scalar, check_index, one_of, resolve_dtype, zero_of
from .errors import InfiniteIndexError, UnboundedLengthError

T = TypeVar("T")


def _is_scalar(value: object) -> bool:
    if isinstance(value, numbers.Number):
        return True
    return isinstance(value, jax.Array) and value.ndim == 0


class InfiniteArray(ABC, Generic[T]):
    """An array indexed over ``[0, inf)`` whose elements are computed on access.

    Subclasses implement :meth:`get`. Nothing is ever pre-computed; ``len()``
    raises because no infinite array has a finite length.
    """

    dtype: ElementType | None = None

    @abstractmethod
    def get(self, index: int) -> T:
        """Value at ``index``."""

    def iter(self) -> Iterator[T]:
        """Fresh single-pass iterator yielding ``get(0), get(1), ...``."""
        return SequenceIterator(self)

    @property
    def length(self) -> int | None:
        return None

    def share(self) -> InfiniteArray[T]:
        """Handle an operation may keep and re-read at every index."""
        return self

    def take(self, n: int) -> list[T]:
        count = operator.index(n)
        if count < 0:
            raise ValueError(f"take() count must be non-negative; got {count}")
        return list(itertools.islice(self.iter(), count))

    def to_jax(self, n: int, dtype=None) -> jax.Array:
        """First ``n`` elements as a 1-d ``jax.Array``."""
        return jnp.asarray(self.take(n), dtype=dtype)

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._get_slice(key)
        return self.get(key)

    def _get_slice(self, key: slice) -> list[T]:
        if key.stop is None:
            raise UnboundedLengthError(f"slicing {type(self).__name__} needs an explicit stop")
        start = 0 if key.start is None else operator.index(key.start)
        stop = operator.index(key.stop)
        step = 1 if key.step is None else operator.index(key.step)
        if start < 0 or stop < 0:
            raise InfiniteIndexError(min(start, stop))
        if step <= 0:
            raise ValueError(f"slice step must be positive; got {step}")
        return [self.get(i) for i in range(start, stop, step)]

    def __iter__(self) -> Iterator[T]:
        return self.iter()

    def __len__(self) -> int:
        raise UnboundedLengthError(f"{type(self).__name__} has no finite length")

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        try:
            preview = ", ".join(repr(as_python_scalar(v)) for v in self.take(settings.REPR_PREVIEW))
        except Exception:
            preview = ""
        if preview:
            preview += ", "
        return f"{type(self).__name__}([{preview}...])"

    def __add__(self, other):
        from . import operations

        if isinstance(other, InfiniteArray):
            return operations.add_arrays(self, other)
        if _is_scalar(other):
            return operations.add_scalar(self, other)
        return NotImplemented

    def __radd__(self, other):
        from . import operations

        if _is_scalar(other):
            return operations.add_scalar(self, other)
        return NotImplemented

    def __sub__(self, other):
        from . import operations

        if isinstance(other, InfiniteArray):
            return operations.sub_arrays(self, other)
        if _is_scalar(other):
            return operations.broadcast(self, lambda x: x - other)
        return NotImplemented

    def __rsub__(self, other):
        from . import operations

        if _is_scalar(other):
            return operations.broadcast(self, lambda x: other - x)
        return NotImplemented

    def __mul__(self, other):
        from . import operations

        if isinstance(other, InfiniteArray):
            return operations.mul_arrays(self, other)
        if _is_scalar(other):
            return operations.mul_scalar(self, other)
        return NotImplemented

    def __rmul__(self, other):
        from . import operations

        if _is_scalar(other):
            return operations.mul_scalar(self, other)
        return NotImplemented

    def __truediv__(self, other):
        from . import operations

        if isinstance(other, InfiniteArray):
            return operations.div_arrays(self, other)
        if _is_scalar(other):
            return operations.broadcast(self, lambda x: x / other)
        return NotImplemented

    def __rtruediv__(self, other):
        from . import operations

        if _is_scalar(other):
            return operations.broadcast(self, lambda x: other / x)
        return NotImplemented

    def __neg__(self):
        from . import operations

        return operations.broadcast(self, operator.neg, dtype=self.dtype)


class InfiniteVector(InfiniteArray[T]):
    """One-dimensional infinite array."""


class SequenceIterator(Iterator, Generic[T]):
    """Single-pass iterator holding a reference to its source array, not a copy of it."""

    __slots__ = ("_source", "_index")

    def __init__(self, source: InfiniteArray[T]) -> None:
        self._source = source
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __iter__(self) -> SequenceIterator[T]:
        return self

    def __next__(self) -> T:
        value = self._source.get(self._index)
        self._index += 1
        return value


class InfiniteArrayFromFn(InfiniteVector[T]):
    """Infinite array backed by a pure function ``index -> value``.

    ``get(i)`` calls the function every time; results are not memoized.
    """

    def __init__(self, fn: Callable[[int], T], dtype=None) -> None:
        if not callable(fn):
            raise TypeError(f"InfiniteArrayFromFn needs a callable; got {type(fn).__name__}")
        self._fn = fn
        self.dtype = None if dtype is None else resolve_dtype(dtype)

    @property
    def fn(self) -> Callable[[int], T]:
        return self._fn

    def get(self, index: int) -> T:
        return self._fn(check_index(index))


class _ConstantArray(InfiniteVector[T]):
    def __init__(self, value: T, dtype: ElementType) -> None:
        self._value = value
        self.dtype = dtype

    @property
    def value(self) -> T:
        return self._value

    def get(self, index: int) -> T:
        check_index(index)
        return self._value

    def iter(self) -> Iterator[T]:
        return itertools.repeat(self._value)


class Ones(_ConstantArray[T]):
    """Every element is the multiplicative identity of ``dtype``."""

    def __init__(self, dtype=None) -> None:
        resolved = resolve_dtype(dtype)
        super().__init__(one_of(resolved), resolved)


class Zeros(_ConstantArray[T]):
    """Every element is the additive identity of ``dtype``."""

    def __init__(self, dtype=None) -> None:
        resolved = resolve_dtype(dtype)
        super().__init__(zero_of(resolved), resolved)
