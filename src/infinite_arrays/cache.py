"""Mutable overlay over an immutable infinite array."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Generic, TypeVar

from .arrays import InfiniteArray, InfiniteVector
from .elements import check_index

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CachedArray(InfiniteVector[T]):
    """Infinite array whose elements can be overridden index by index.

    Reads return the override at an index when one was set and otherwise
    re-evaluate ``base.get``. The base array is never modified. Overrides
    are kept until :meth:`clear_cache`; there is no eviction.
    """

    def __init__(self, base: InfiniteArray[T]) -> None:
        if not isinstance(base, InfiniteArray):
            raise TypeError(f"CachedArray wraps an InfiniteArray; got {type(base).__name__}")
        self._base = base.share()
        self._cache: dict[int, T] = {}
        self.dtype = base.dtype
        logger.debug("Created CachedArray over %s", type(base).__name__)

    @property
    def base(self) -> InfiniteArray[T]:
        return self._base

    def get(self, index: int) -> T:
        i = check_index(index)
        if i in self._cache:
            return self._cache[i]
        return self._base.get(i)

    def set(self, index: int, value: T) -> None:
        self._cache[check_index(index)] = value

    __setitem__ = set

    def get_mut_or_default(self, index: int) -> OverrideSlot[T]:
        """Slot for ``index``, materialized from the base value if it has no override yet."""
        i = check_index(index)
        if i not in self._cache:
            self._cache[i] = self._base.get(i)
        return OverrideSlot(self, i)

    get_mut = get_mut_or_default

    def has_override(self, index: int) -> bool:
        return check_index(index) in self._cache

    def overrides(self) -> Mapping[int, T]:
        return MappingProxyType(dict(self._cache))

    def clear_cache(self) -> None:
        dropped = len(self._cache)
        self._cache.clear()
        logger.debug("Cleared %d override(s) from CachedArray over %s", dropped, type(self._base).__name__)

    def cache_size(self) -> int:
        return len(self._cache)

    def copy(self) -> CachedArray[T]:
        """New overlay with its own copy of the overrides; an overlay base is copied too."""
        dup = CachedArray(self._base)
        dup._cache = dict(self._cache)
        return dup

    __copy__ = copy

    def share(self) -> CachedArray[T]:
        return self.copy()


@dataclass
class OverrideSlot(Generic[T]):
    """Writable handle on one override entry of a :class:`CachedArray`."""

    owner: CachedArray[T]
    index: int

    @property
    def value(self) -> T:
        return self.owner.get(self.index)

    @value.setter
    def value(self, new_value: T) -> None:
        self.owner.set(self.index, new_value)

    def update(self, fn: Callable[[T], T]) -> T:
        """Replace the slot value with ``fn(value)`` and return the new value."""
        new_value = fn(self.value)
        self.value = new_value
        return new_value
