"""
File-backed caching layer.

Provides JSON document storage for:
- The enriched repository catalog
- Per-repository commit histories

Usage:
    from tracker.cache import FileCacheStore, CacheKeys

    store = FileCacheStore("storage")
    await store.save_commits("octo", "hello", commits)
    commits = await store.load_commits("octo", "hello")
"""

from tracker.cache.cache_keys import CacheKeys
from tracker.cache.file_store import FileCacheStore
from tracker.cache.keyed_lock import KeyedLock

__all__ = [
    "CacheKeys",
    "FileCacheStore",
    "KeyedLock",
]
