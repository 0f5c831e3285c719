"""Element-type model: identity elements, index conversion and index validation.

Two families of element types are supported:

* Python numeric types (``int``, ``float``, ``complex``, ``Fraction``,
  ``Decimal``), whose values are plain Python objects.
* Fixed-width dtypes understood by ``jax.numpy``. Values are 0-d
  ``jax.Array`` scalars and keep the dtype's native overflow behaviour.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Final, Union

import jax
import jax.numpy as jnp

from . import settings
from .errors import ElementTypeError, InfiniteIndexError

ElementType = Union[type, jnp.dtype]

_PYTHON_TYPES: Final[tuple[type, ...]] = (int, float, complex, Fraction, Decimal)
_EXACT_PYTHON_TYPES: Final[tuple[type, ...]] = (int, Fraction, Decimal)
_PYTHON_TYPE_NAMES: Final[dict[str, type]] = {"int": int, "float": float, "complex": complex}


class ElementKind(str, Enum):
    PYTHON = "python"
    ARRAY_SCALAR = "array_scalar"


@dataclass(frozen=True)
class ElementInfo:
    kind: ElementKind
    name: str
    exact: bool


def resolve_dtype(dtype: object = None) -> ElementType:
    """Normalize a user-supplied element type, falling back to the configured default."""
    if dtype is None:
        dtype = settings.DEFAULT_DTYPE
    if isinstance(dtype, str) and dtype in _PYTHON_TYPE_NAMES:
        return _PYTHON_TYPE_NAMES[dtype]
    if is_python_type(dtype):
        return dtype
    try:
        resolved = jnp.dtype(dtype)
    except TypeError as exc:
        raise ElementTypeError(dtype, "numeric element values") from exc
    if not jnp.issubdtype(resolved, jnp.number):
        raise ElementTypeError(resolved, "numeric element values")
    return resolved


def dtype_of(value: object) -> ElementType:
    """Element type carried by an existing value."""
    if isinstance(value, bool):
        raise ElementTypeError(bool, "numeric element values")
    if type(value) in _PYTHON_TYPES:
        return type(value)
    dtype = getattr(value, "dtype", None)
    if dtype is not None and getattr(value, "ndim", 0) == 0:
        return resolve_dtype(dtype)
    raise ElementTypeError(type(value), "numeric element values")


def is_python_type(dtype: object) -> bool:
    return any(dtype is t for t in _PYTHON_TYPES)


def coerce(value: object, dtype: ElementType):
    """Build an element of ``dtype`` from ``value``."""
    if is_python_type(dtype):
        return dtype(value)
    return jnp.asarray(value, dtype=dtype)


def one_of(dtype: object = None):
    return coerce(1, resolve_dtype(dtype))


def zero_of(dtype: object = None):
    return coerce(0, resolve_dtype(dtype))


def from_index(index: int, dtype: ElementType):
    """Convert a non-negative index into an element; out-of-range indices fail the way the dtype does."""
    return coerce(index, dtype)


def check_index(index: object) -> int:
    i = operator.index(index)
    if i < 0:
        raise InfiniteIndexError(i)
    return i


def is_exact(dtype: ElementType) -> bool:
    if is_python_type(dtype):
        return dtype in _EXACT_PYTHON_TYPES
    return bool(jnp.issubdtype(dtype, jnp.integer))


def element_info(dtype: object = None) -> ElementInfo:
    resolved = resolve_dtype(dtype)
    if is_python_type(resolved):
        return ElementInfo(kind=ElementKind.PYTHON, name=resolved.__name__, exact=is_exact(resolved))
    return ElementInfo(kind=ElementKind.ARRAY_SCALAR, name=str(resolved), exact=is_exact(resolved))


def as_python_scalar(value: object):
    """Unwrap a 0-d array to a Python scalar for display; other values pass through."""
    if isinstance(value, jax.Array) and value.ndim == 0:
        return value.item()
    return value


def is_integer(dtype: ElementType) -> bool:
    if is_python_type(dtype):
        return dtype is int
    return bool(jnp.issubdtype(dtype, jnp.integer))
