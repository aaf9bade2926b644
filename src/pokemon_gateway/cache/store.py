"""
TTL cache for lookup results.

Entries share one time-to-live fixed at construction. An entry is live while
``now < expires_at``; from then on it is treated exactly like a missing key
and is dropped on the next read of that key. There is no capacity bound and
no LRU eviction.

A TTL of zero is a valid configuration: every write is already expired, so
the cache never produces a hit.
"""

import time
from dataclasses import dataclass
from typing import Callable

import structlog

from pokemon_gateway.cache.locks import ReadWriteLock
from pokemon_gateway.models.pokemon import PokemonResult

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """
    Cached value plus its expiry on the store's clock.
    
    Replaced wholesale on refresh, never mutated.
    """

    value: PokemonResult
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class TTLCache:
    """
    Key/value store with per-entry expiry, safe for concurrent access.
    
    The map is guarded by a ReadWriteLock: ``get`` calls share the read side,
    ``set``/``delete``/``clear`` and lazy eviction take the write side. All
    critical sections are O(1) dictionary operations.
    
    Attributes:
        ttl_seconds: Lifetime applied to every entry on write
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.
        
        Args:
            ttl_seconds: Entry lifetime in seconds (0 disables caching)
            clock: Monotonic time source, injectable for tests
        
        Raises:
            ValueError: If ttl_seconds is negative
        """
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")

        self._ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()

        logger.info("TTL cache initialized", ttl_seconds=self._ttl_seconds)

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, key: str) -> tuple[PokemonResult | None, bool]:
        """
        Look up a live entry.
        
        Returns:
            ``(value, True)`` on a live hit, ``(None, False)`` when the key is
            absent or its entry has expired.
        """
        with self._lock.read_locked():
            entry = self._entries.get(key)

        if entry is None:
            return None, False

        if not entry.is_expired(self._clock()):
            return entry.value, True

        self._evict_if_expired(key)
        return None, False

    def set(self, key: str, value: PokemonResult) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        entry = CacheEntry(value=value, expires_at=self._clock() + self._ttl_seconds)
        with self._lock.write_locked():
            self._entries[key] = entry

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if an entry (live or expired) was present."""
        with self._lock.write_locked():
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock.write_locked():
            self._entries.clear()

    def __len__(self) -> int:
        # Physical size: expired entries count until they are read again
        with self._lock.read_locked():
            return len(self._entries)

    def _evict_if_expired(self, key: str) -> None:
        # Re-check under the write lock: a concurrent set() may have refreshed
        # the key between our read and this point.
        with self._lock.write_locked():
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug("Evicted expired cache entry", key=key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(ttl_seconds={self._ttl_seconds})"
