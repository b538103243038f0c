"""Per-handle cache slots with explicit invalidation."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class CacheSlot(Generic[T]):
    """A single cached value that is either fresh or stale.

    A stale slot holds no value. ``key`` distinguishes values fetched in
    different modes (for example stat versus lstat); a lookup with a
    different key is treated as a miss.
    """

    __slots__ = ("_value", "_key", "_fresh")

    def __init__(self) -> None:
        self._value: T | None = None
        self._key: Any = None
        self._fresh = False

    @property
    def fresh(self) -> bool:
        return self._fresh

    def get(self, key: Any = None) -> T | None:
        """Return the cached value, or None if stale or cached under another key."""
        if self._fresh and self._key == key:
            return self._value
        return None

    def set(self, value: T, key: Any = None) -> T:
        """Replace the slot content wholesale and mark it fresh."""
        self._value = value
        self._key = key
        self._fresh = True
        return value

    def invalidate(self) -> None:
        """Mark the slot stale and drop its value."""
        self._value = None
        self._key = None
        self._fresh = False


def invalidates(method: F) -> F:
    """Clear the handle's caches before running a mutating coroutine method.

    The caches are dropped before the operation starts, so a partially
    failed mutation never leaves a trusted cache behind.
    """

    @functools.wraps(method)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        self.clear_cache()
        return await method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
