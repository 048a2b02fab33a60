"""In-process cache for reference data.

The repositories keep the built zone graph and the parsed route
directions here. Entries live for the whole process unless a TTL is
configured (``ANDANTE_DATA_CACHE_TTL_SECONDS``).
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")

_MISSING = object()
_NEVER = float("inf")


@dataclass
class InMemoryCache(Generic[T]):
    """Keyed store for loaded reference data, shared between repositories.

    ``None``, empty tuples and other falsy values are valid entries.
    Expiry uses the monotonic clock; when ``max_size`` is reached the
    oldest key is dropped.

    Attributes:
        default_ttl_seconds: Lifetime of new entries, None for no expiry
        max_size: Entry limit, None for no limit
        name: Suffix of the cache's logger name
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"

    _store: Dict[str, Tuple[Any, float]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _lookup(self, key: str) -> Any:
        with self._lock:
            entry = self._store.get(key)
            if entry is not None and time.monotonic() > entry[1]:
                del self._store[key]
                self._logger.debug("Reference data expired", extra={"key": key})
                entry = None

            if entry is None:
                self._misses += 1
                return _MISSING

            self._hits += 1
            return entry[0]

    def get(self, key: str) -> Optional[T]:
        value = self._lookup(key)
        return None if value is _MISSING else value

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store ``value``; ``ttl`` overrides the default lifetime."""
        lifetime = self.default_ttl_seconds if ttl is None else ttl
        expiry = _NEVER if lifetime is None else time.monotonic() + lifetime

        with self._lock:
            full = self.max_size is not None and len(self._store) >= self.max_size
            if full and key not in self._store:
                evicted = next(iter(self._store))
                del self._store[evicted]
                self._logger.debug("Reference data evicted", extra={"key": evicted})
            self._store[key] = (value, expiry)

        self._logger.debug("Reference data cached", extra={"key": key, "ttl": lifetime})

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Return the entry for ``key``, loading it with ``compute_fn`` on a miss.

        The loader runs outside the lock. When it raises nothing is
        stored, so the next call retries the load.
        """
        value = self._lookup(key)
        if value is not _MISSING:
            return value

        self._logger.debug("Loading reference data", extra={"key": key})
        value = compute_fn()
        self.set(key, value)
        return value

    def clear(self) -> int:
        """Drop every entry and reset the counters; return how many were dropped."""
        with self._lock:
            dropped = len(self._store)
            self._store.clear()
            self._hits = self._misses = 0
        self._logger.info("Reference data cache cleared", extra={"entries_cleared": dropped})
        return dropped

    def invalidate(self, key: str) -> bool:
        with self._lock:
            removed = self._store.pop(key, None) is not None
        if removed:
            self._logger.debug("Reference data invalidated", extra={"key": key})
        return removed

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(self._hits / lookups * 100, 1) if lookups else 0.0,
            }
