"""
Single entry point to the verse cache.

Wraps one ``CacheStore`` with the reference (TTL) policy and the daily
(calendar day) policy so both share persistence and locking.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from ..api.fetcher import VerseFetcher
from ..config.settings import Settings
from ..models.verse import VerseResponse, local_now
from ..utils.logger import get_logger
from .cache_store import CacheStore, ErrorHook
from .daily_verse import DailyVersePolicy
from .reference_cache import DEFAULT_TTL, ReferenceCachePolicy

logger = get_logger(__name__)


class VerseCacheService:
    """
    Verse cache facade constructed once at startup and passed to callers.

    Example:
        >>> service = VerseCacheService.from_settings(settings, client)
        >>> today = await service.get_todays_verse("web")
        >>> passage = await service.get_verse("Romans 8:28", "web")
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: VerseFetcher,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = local_now,
    ):
        self.store = store
        self.clock = clock
        self.references = ReferenceCachePolicy(store, fetcher, ttl=ttl, clock=clock)
        self.daily = DailyVersePolicy(store, fetcher, clock=clock)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        fetcher: VerseFetcher,
        on_error: Optional[ErrorHook] = None,
    ) -> VerseCacheService:
        """
        Build the service with a diskcache store in the configured directory.

        Args:
            settings: Application settings
            fetcher: Remote verse source
            on_error: Optional storage failure hook
        """
        store = CacheStore.open(settings.cache_directory, on_error=on_error)
        return cls(store, fetcher, ttl=timedelta(hours=settings.cache_ttl_hours))

    async def get_verse(self, reference: str, translation: str) -> VerseResponse:
        """Passage for ``reference``, cached for the TTL."""
        return await self.references.get_or_fetch(reference, translation)

    async def get_todays_verse(self, translation: str) -> VerseResponse:
        """Verse of the day, cached until local midnight."""
        return await self.daily.get_todays_verse(translation)

    def get_cached(self, reference: str) -> Optional[VerseResponse]:
        """Unexpired cached passage for ``reference``, without fetching."""
        return self.references.get_cached(reference)

    def clear_cache(self) -> None:
        """Drop every cached passage, including today's verse."""
        self.store.clear()

    def purge_expired(self) -> None:
        """Remove expired entries."""
        self.store.purge_expired(self.clock())

    def cache_count(self) -> int:
        """Number of cached entries."""
        return self.store.count()

    def stats(self) -> Dict[str, int]:
        """Cache statistics."""
        return self.store.stats()

    def close(self) -> None:
        self.store.close()
