"""infinite-arrays public API."""

from .arrays import InfiniteArray, InfiniteArrayFromFn, InfiniteVector, Ones, SequenceIterator, Zeros
from .cache import CachedArray, OverrideSlot
from .elements import ElementInfo, ElementKind, element_info, one_of, resolve_dtype, zero_of
from .errors import ElementTypeError, InfiniteArrayError, InfiniteIndexError, UnboundedLengthError
from .operations import add_arrays, add_scalar, broadcast, cumsum, div_arrays, mul_arrays, mul_scalar, sub_arrays
from .ranges import InfStepRange, InfUnitRange, OneToInf, ProgressionIterator

__all__ = [
    "InfiniteArray",
    "InfiniteVector",
    "InfiniteArrayFromFn",
    "SequenceIterator",
    "Ones",
    "Zeros",
    "OneToInf",
    "InfUnitRange",
    "InfStepRange",
    "ProgressionIterator",
    "cumsum",
    "broadcast",
    "add_scalar",
    "mul_scalar",
    "add_arrays",
    "sub_arrays",
    "mul_arrays",
    "div_arrays",
    "CachedArray",
    "OverrideSlot",
    "ElementInfo",
    "ElementKind",
    "element_info",
    "resolve_dtype",
    "one_of",
    "zero_of",
    "InfiniteArrayError",
    "ElementTypeError",
    "InfiniteIndexError",
    "UnboundedLengthError",
]
