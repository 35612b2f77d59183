# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Time-bounded keyed cache with lazy expiry.

This module implements the shared cache held by the ExecutionContext. It is
used both as the parse-result cache (keys like "ast:/abs/path.tsx") and as a
general memoization utility for plugins.

Key Features:
- Per-entry TTL with a configurable default
- Lazy expiry: an expired entry is treated as absent and evicted on the next
  access to its key (get/has), or in bulk by cleanup()
- Atomic get/set under a single lock
- Statistics tracking for cache performance

Design Decisions:
- No persistence: entries live for one process only
- Injectable clock so expiry can be tested without sleeping
"""

import logging
import time
from threading import Lock
from typing import Any, Callable, Dict, Hashable, Optional

from nextscope.models import CacheEntry, CacheStatistics

logger = logging.getLogger(__name__)

_MISSING = object()


class KeyedCache:
    """Key/value store whose entries expire after a time-to-live.

    Usage:
        cache = KeyedCache(default_ttl_seconds=300)
        cache.set("ast:/src/App.tsx", artifact)
        artifact = cache.get("ast:/src/App.tsx")
        stats = cache.get_statistics()
    """

    DEFAULT_TTL_SECONDS = 5 * 60.0

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize keyed cache.

        Args:
            default_ttl_seconds: Lifetime applied when set() gets no ttl (default: 300).
            clock: Monotonic time source in seconds.

        Raises:
            ValueError: If default_ttl_seconds is not positive.
        """
        if default_ttl_seconds <= 0:
            raise ValueError(f"default_ttl_seconds must be positive, got {default_ttl_seconds}")

        self._default_ttl = float(default_ttl_seconds)
        self._clock = clock
        self._entries: Dict[Hashable, CacheEntry] = {}
        self._stats = CacheStatistics()
        self._lock = Lock()

        logger.debug(f"KeyedCache initialized with default_ttl={self._default_ttl}s")

    @property
    def default_ttl_seconds(self) -> float:
        return self._default_ttl

    def _live_entry(self, key: Hashable) -> Optional[CacheEntry]:
        """Return the entry for key, evicting it first if expired. Caller holds the lock."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() > entry.expires_at:
            del self._entries[key]
            self._stats.expirations += 1
            self._stats.current_entries = len(self._entries)
            logger.debug(f"Cache entry expired: {key}")
            return None

        return entry

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value, or default if absent or expired."""
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                self._stats.misses += 1
                return default

            entry.last_accessed = self._clock()
            self._stats.hits += 1
            return entry.value

    def set(self, key: Hashable, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store value under key for ttl_seconds (or the default TTL)."""
        ttl = self._default_ttl if ttl_seconds is None else float(ttl_seconds)
        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(
                value=value,
                expires_at=now + ttl,
                created_at=now,
                last_accessed=now,
            )
            self._stats.sets += 1
            self._stats.current_entries = len(self._entries)

    def has(self, key: Hashable) -> bool:
        """Check whether a live entry exists. Expired entries are evicted."""
        with self._lock:
            return self._live_entry(key) is not None

    def delete(self, key: Hashable) -> bool:
        """Remove key. Returns True if an entry was removed."""
        with self._lock:
            removed = self._entries.pop(key, None) is not None
            self._stats.current_entries = len(self._entries)
            return removed

    def delete_prefix(self, prefix: str) -> int:
        """Remove every entry whose string key starts with prefix.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            doomed = [
                key for key in self._entries if isinstance(key, str) and key.startswith(prefix)
            ]
            for key in doomed:
                del self._entries[key]
            self._stats.current_entries = len(self._entries)
        return len(doomed)

    def clear(self) -> None:
        """Remove all entries. Statistics counters are kept."""
        with self._lock:
            self._entries.clear()
            self._stats.current_entries = 0
            logger.debug("Cache cleared")

    def get_or_set(
        self,
        key: Hashable,
        factory: Callable[[], Any],
        ttl_seconds: Optional[float] = None,
    ) -> Any:
        """Return the cached value for key, computing and storing it on a miss.

        The factory runs outside the lock; a concurrent caller may compute the
        same value, and the last write wins.
        """
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            return value

        value = factory()
        self.set(key, value, ttl_seconds)
        return value

    def cleanup(self) -> int:
        """Evict every expired entry.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
            for key in expired:
                del self._entries[key]

            self._stats.expirations += len(expired)
            self._stats.current_entries = len(self._entries)

        if expired:
            logger.debug(f"Cache cleanup removed {len(expired)} expired entries")
        return len(expired)

    def get_statistics(self) -> CacheStatistics:
        """Return a copy of the cache statistics."""
        with self._lock:
            return CacheStatistics(
                hits=self._stats.hits,
                misses=self._stats.misses,
                sets=self._stats.sets,
                expirations=self._stats.expirations,
                current_entries=len(self._entries),
            )

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet evicted."""
        with self._lock:
            return len(self._entries)
