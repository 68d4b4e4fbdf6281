"""
Durable key to cache-entry mapping for fetched passages.

The whole mapping is persisted as a single JSON blob under one storage key
of a mapping-like backend (a ``diskcache.Cache`` in production, a ``dict``
in tests). Every mutation is a read-modify-write of the complete blob, so
mutations are serialized with a lock.

Storage failures never propagate: unreadable data is treated as an empty
cache and failed writes are logged and reported to an optional hook.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional

import diskcache
from pydantic import TypeAdapter

from ..models.verse import CacheEntry
from ..utils.logger import get_logger

logger = get_logger(__name__)

VERSE_CACHE_KEY = "com.versekeeper.verseCache"

ErrorHook = Callable[[str, Exception], None]

_ENTRIES_ADAPTER = TypeAdapter(Dict[str, CacheEntry])


class CacheStore:
    """
    Persisted mapping of cache key to ``CacheEntry``.

    Attributes:
        backend: Mapping-like storage supporting ``get``, item assignment and ``pop``
        storage_key: Backend key holding the serialized mapping
        on_error: Optional hook called with ("load" | "save" | "clear", exception)
    """

    def __init__(
        self,
        backend: Any,
        storage_key: str = VERSE_CACHE_KEY,
        on_error: Optional[ErrorHook] = None,
    ):
        self.backend = backend
        self.storage_key = storage_key
        self.on_error = on_error
        self._lock = threading.RLock()
        self._load_errors = 0
        self._save_errors = 0

    @classmethod
    def open(cls, cache_dir: Path, on_error: Optional[ErrorHook] = None) -> CacheStore:
        """
        Open a store backed by a diskcache directory.

        Args:
            cache_dir: Directory for cache storage
            on_error: Optional storage failure hook
        """
        cache_dir = Path(cache_dir)
        cache_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Cache initialized at {cache_dir}")
        return cls(diskcache.Cache(str(cache_dir)), on_error=on_error)

    @classmethod
    def in_memory(cls, on_error: Optional[ErrorHook] = None) -> CacheStore:
        """Create a store backed by a plain dict."""
        return cls({}, on_error=on_error)

    def load(self) -> Dict[str, CacheEntry]:
        """
        Read the persisted mapping.

        Returns:
            The stored entries; empty if nothing is stored or the data is unreadable
        """
        try:
            blob = self.backend.get(self.storage_key)
            if blob is None:
                return {}
            return _ENTRIES_ADAPTER.validate_json(blob)
        except Exception as e:
            self._load_errors += 1
            logger.warning(f"Discarding unreadable verse cache: {e}")
            self._report("load", e)
            return {}

    def save(self, entries: Dict[str, CacheEntry]) -> None:
        """
        Persist the complete mapping, replacing what is stored.

        Args:
            entries: Entries to store
        """
        try:
            self.backend[self.storage_key] = _ENTRIES_ADAPTER.dump_json(entries)
            logger.debug(f"Verse cache saved ({len(entries)} entries)")
        except Exception as e:
            self._save_errors += 1
            logger.warning(f"Failed to save verse cache: {e}")
            self._report("save", e)

    def clear(self) -> None:
        """Remove the persisted mapping."""
        with self._lock:
            try:
                self.backend.pop(self.storage_key, None)
                logger.info("Verse cache cleared")
            except Exception as e:
                logger.error(f"Cache clear error: {e}")
                self._report("clear", e)

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold exclusive access to the store for a load-mutate-save cycle."""
        with self._lock:
            yield

    def update(self, mutate: Callable[[Dict[str, CacheEntry]], None]) -> Dict[str, CacheEntry]:
        """
        Load, mutate in place and save the mapping while holding the lock.

        Args:
            mutate: Callable modifying the loaded mapping

        Returns:
            The mapping as saved
        """
        with self._lock:
            entries = self.load()
            mutate(entries)
            self.save(entries)
            return entries

    def get(self, key: str) -> Optional[CacheEntry]:
        """Entry stored under ``key``, expired or not."""
        with self._lock:
            return self.load().get(key)

    def purge_expired(self, now: datetime) -> None:
        """
        Remove every entry whose ``expires_at`` is at or before ``now``.

        Args:
            now: Reference instant
        """
        def drop_expired(entries: Dict[str, CacheEntry]) -> None:
            expired = [key for key, entry in entries.items() if entry.expires_at <= now]
            for key in expired:
                del entries[key]
            if expired:
                logger.info(f"Purged {len(expired)} expired cache entries")

        self.update(drop_expired)

    def count(self) -> int:
        """Number of stored entries."""
        return len(self.load())

    def stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        return {
            "entries": self.count(),
            "load_errors": self._load_errors,
            "save_errors": self._save_errors,
        }

    def close(self) -> None:
        """Close the backend if it holds resources."""
        close = getattr(self.backend, "close", None)
        if callable(close):
            close()

    def _report(self, operation: str, error: Exception) -> None:
        if self.on_error is None:
            return
        try:
            self.on_error(operation, error)
        except Exception as hook_error:
            logger.error(f"Cache error hook failed: {hook_error}")
