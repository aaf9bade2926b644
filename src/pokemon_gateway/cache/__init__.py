"""
In-process TTL cache for lookup results.

- store.py: TTLCache (expiry policy) and CacheEntry
- locks.py: ReadWriteLock guarding the cache map
"""

from pokemon_gateway.cache.locks import ReadWriteLock
from pokemon_gateway.cache.store import CacheEntry, TTLCache

__all__ = [
    "CacheEntry",
    "ReadWriteLock",
    "TTLCache",
]
