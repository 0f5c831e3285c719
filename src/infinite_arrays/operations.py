"""Pointwise operations that build new lazy arrays from existing ones.

Every operation returns an :class:`InfiniteArrayFromFn` whose function
re-reads its inputs at every requested index. Inputs are held through
:meth:`InfiniteArray.share`, so a mutable input is duplicated when the
operation is built and later mutations of the caller's copy are not seen.
Numeric faults (division by zero, overflow) propagate unchanged.
"""

from __future__ import annotations

import functools
import logging
import operator
from collections.abc import Callable
from typing import Final

from . import settings
from .arrays import InfiniteArray, InfiniteArrayFromFn
from .elements import ElementType, dtype_of, is_integer
from .errors import ElementTypeError

logger = logging.getLogger(__name__)

BinaryOp = Callable[[object, object], object]

_ARRAY_OPS: Final[dict[str, BinaryOp]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


def _shared(value: object, where: str) -> InfiniteArray:
    if not isinstance(value, InfiniteArray):
        raise TypeError(f"{where} expects an InfiniteArray; got {type(value).__name__}")
    return value.share()


def _scalar_dtype(value: object) -> ElementType | None:
    try:
        return dtype_of(value)
    except ElementTypeError:
        return None


def _common_dtype(*dtypes: ElementType | None) -> ElementType | None:
    first = dtypes[0]
    if first is None:
        return None
    for dtype in dtypes[1:]:
        if dtype is None or dtype != first:
            return None
    return first


def _result_dtype(symbol: str, *dtypes: ElementType | None) -> ElementType | None:
    dtype = _common_dtype(*dtypes)
    if symbol == "/" and dtype is not None and is_integer(dtype):
        return None
    return dtype


def cumsum(arr: InfiniteArray) -> InfiniteArrayFromFn:
    """Running sum: ``result[i] = arr[0] + ... + arr[i]``.

    Each ``get(i)`` re-sums from index 0, so it costs O(i).
    """
    source = _shared(arr, "cumsum")
    warned = False

    def running_sum(i: int):
        nonlocal warned
        if i >= settings.CUMSUM_WARN_INDEX and not warned:
            warned = True
            logger.warning(
                "cumsum of %s evaluated at index %d; every get() re-sums from 0",
                type(source).__name__,
                i,
            )
        return functools.reduce(operator.add, (source.get(k) for k in range(i + 1)))

    return InfiniteArrayFromFn(running_sum, dtype=source.dtype)


def broadcast(arr: InfiniteArray, fn: Callable[[object], object], dtype=None) -> InfiniteArrayFromFn:
    """Apply ``fn`` to every element: ``result[i] = fn(arr[i])``."""
    if not callable(fn):
        raise TypeError(f"broadcast needs a callable; got {type(fn).__name__}")
    source = _shared(arr, "broadcast")
    return InfiniteArrayFromFn(lambda i: fn(source.get(i)), dtype=dtype)


def _scalar_op(symbol: str, arr: InfiniteArray, scalar: object) -> InfiniteArrayFromFn:
    op = _ARRAY_OPS[symbol]
    source = _shared(arr, f"scalar '{symbol}'")
    dtype = _result_dtype(symbol, source.dtype, _scalar_dtype(scalar))
    return InfiniteArrayFromFn(lambda i: op(source.get(i), scalar), dtype=dtype)


def _elementwise(symbol: str, a: InfiniteArray, b: InfiniteArray) -> InfiniteArrayFromFn:
    op = _ARRAY_OPS[symbol]
    left = _shared(a, f"elementwise '{symbol}'")
    right = _shared(b, f"elementwise '{symbol}'")
    dtype = _result_dtype(symbol, left.dtype, right.dtype)
    return InfiniteArrayFromFn(lambda i: op(left.get(i), right.get(i)), dtype=dtype)


def add_scalar(arr: InfiniteArray, scalar) -> InfiniteArrayFromFn:
    return _scalar_op("+", arr, scalar)


def mul_scalar(arr: InfiniteArray, scalar) -> InfiniteArrayFromFn:
    return _scalar_op("*", arr, scalar)


def add_arrays(a: InfiniteArray, b: InfiniteArray) -> InfiniteArrayFromFn:
    return _elementwise("+", a, b)


def sub_arrays(a: InfiniteArray, b: InfiniteArray) -> InfiniteArrayFromFn:
    return _elementwise("-", a, b)


def mul_arrays(a: InfiniteArray, b: InfiniteArray) -> InfiniteArrayFromFn:
    return _elementwise("*", a, b)


def div_arrays(a: InfiniteArray, b: InfiniteArray) -> InfiniteArrayFromFn:
    """Elementwise true division; a zero divisor behaves as the element type does."""
    return _elementwise("/", a, b)
