"""
Time-to-live cache for passage lookups by reference.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from ..api.fetcher import VerseFetcher
from ..models.verse import CacheEntry, VerseResponse, local_now
from ..utils.logger import get_logger
from .cache_store import CacheStore
from .key_normalizer import normalize_reference

logger = get_logger(__name__)

DEFAULT_TTL = timedelta(hours=24)


class ReferenceCachePolicy:
    """
    Serve passages from the store while they are younger than the TTL.

    Entries are keyed by normalized reference only. The translation is not
    part of the key, so a lookup in a different translation replaces the
    stored passage, and a hit may return the previously stored translation.

    Example:
        >>> policy = ReferenceCachePolicy(store, client)
        >>> passage = await policy.get_or_fetch("John 3:16", "web")
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: VerseFetcher,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = local_now,
    ):
        """
        Args:
            store: Shared cache store
            fetcher: Remote source invoked on a miss
            ttl: Validity window of new entries
            clock: Source of the current time (timezone-aware)

        Raises:
            ValueError: If ttl is not positive
        """
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")

        self.store = store
        self.fetcher = fetcher
        self.ttl = ttl
        self.clock = clock

    async def get_or_fetch(self, reference: str, translation: str) -> VerseResponse:
        """
        Return the cached passage for ``reference`` or fetch and cache it.

        Args:
            reference: Passage reference
            translation: Translation passed to the fetcher on a miss

        Returns:
            Cached or freshly fetched passage

        Raises:
            ValueError: If reference is blank
            BibleAPIError: Any fetcher error, unchanged; nothing is cached
        """
        key = self._key(reference)

        cached = self._lookup(key, self.clock())
        if cached is not None:
            logger.debug(f"Cache hit: {reference}")
            return cached

        logger.debug(f"Cache miss: {reference}")
        # Fetch without holding the store lock
        response = await self.fetcher.fetch_verse(reference, translation)

        self._store(key, response, self.clock())
        return response

    def get_cached(self, reference: str) -> Optional[VerseResponse]:
        """
        Cached passage for ``reference`` if present and unexpired.

        Raises:
            ValueError: If reference is blank
        """
        return self._lookup(self._key(reference), self.clock())

    def put(self, reference: str, response: VerseResponse) -> None:
        """
        Store ``response`` under ``reference`` with a fresh TTL.

        Raises:
            ValueError: If reference is blank
        """
        self._store(self._key(reference), response, self.clock())

    def _key(self, reference: str) -> str:
        if not reference or not reference.strip():
            raise ValueError("Reference cannot be empty")
        return normalize_reference(reference)

    def _lookup(self, key: str, now: datetime) -> Optional[VerseResponse]:
        entry = self.store.get(key)
        if entry is None or entry.is_expired(now):
            return None
        return entry.value

    def _store(self, key: str, response: VerseResponse, now: datetime) -> None:
        entry = CacheEntry(value=response, cached_at=now, expires_at=now + self.ttl)

        def put_entry(entries: Dict[str, CacheEntry]) -> None:
            entries[key] = entry

        self.store.update(put_entry)
        logger.debug(f"Cache set: {key} (expires {entry.expires_at.isoformat()})")
