"""
Verse of the day selection.

One random verse is fetched per local calendar day and kept in a reserved
slot of the shared cache store. Freshness is decided by calendar date, not
by a rolling window: a verse cached at 23:59 is stale two minutes later.

Older installs kept the daily verse as a bare passage under
``dailyVerseData`` with its date under ``dailyVerseDate``. Those keys are
still read (and migrated into the slot) so an upgrade does not refetch.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Callable, Dict, Optional

from ..api.fetcher import VerseFetcher
from ..models.verse import CacheEntry, VerseResponse, local_now
from ..utils.logger import get_logger
from .cache_store import CacheStore

logger = get_logger(__name__)

# Normalized reference keys never contain ":"
DAILY_VERSE_KEY = "daily:verse"

LEGACY_DATA_KEY = "dailyVerseData"
LEGACY_DATE_KEY = "dailyVerseDate"

DATE_FORMAT = "%Y-%m-%d"


def today_token(now: datetime) -> str:
    """Calendar date of ``now`` as YYYY-MM-DD."""
    return now.strftime(DATE_FORMAT)


def end_of_day(now: datetime) -> datetime:
    """Next midnight after ``now`` in ``now``'s zone, at that night's offset."""
    return datetime.combine(now.date() + timedelta(days=1), time(0), tzinfo=now.tzinfo)


class DailyVersePolicy:
    """
    Decide whether today's verse can be served from the store.

    The policy never serves a stale verse on its own. When a refetch fails
    the error propagates and the caller may show ``get_stale_daily_verse()``
    as a fallback.
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: VerseFetcher,
        clock: Callable[[], datetime] = local_now,
    ):
        self.store = store
        self.fetcher = fetcher
        self.clock = clock

    def is_fresh(self, entry: CacheEntry, now: datetime) -> bool:
        """
        True when ``entry`` was cached on the same local day as ``now``.

        ``cached_at`` is read in ``now``'s zone, so a zone with daylight-saving
        rules places an entry written under the previous offset on the right date.
        """
        cached_at = entry.cached_at.astimezone(now.tzinfo)
        return today_token(cached_at) == today_token(now)

    async def get_todays_verse(self, translation: str) -> VerseResponse:
        """
        Return today's verse, fetching a random one if the slot is not fresh.

        Args:
            translation: Translation passed to the fetcher on a miss

        Returns:
            Today's passage

        Raises:
            BibleAPIError: Any fetcher error, unchanged; the slot is left as it was
        """
        cached = self.get_cached_daily_verse()
        if cached is not None:
            logger.debug(f"Daily verse cache hit: {cached.reference}")
            return cached

        logger.info("Fetching new daily verse")
        response = await self.fetcher.fetch_random_verse(translation)

        now = self.clock()
        self._store(response, now)
        logger.info(f"Daily verse for {today_token(now)}: {response.reference}")
        return response

    def get_cached_daily_verse(self) -> Optional[VerseResponse]:
        """Today's verse if the slot (or legacy layout) holds one from today."""
        now = self.clock()
        entry = self.store.get(DAILY_VERSE_KEY)
        if entry is not None and self.is_fresh(entry, now):
            return entry.value
        return self._migrate_legacy(now)

    def get_stale_daily_verse(self) -> Optional[VerseResponse]:
        """Whatever verse the slot holds, regardless of the day it was cached."""
        entry = self.store.get(DAILY_VERSE_KEY)
        return entry.value if entry is not None else None

    def _store(self, response: VerseResponse, now: datetime) -> None:
        entry = CacheEntry(value=response, cached_at=now, expires_at=end_of_day(now))

        def put_slot(entries: Dict[str, CacheEntry]) -> None:
            entries[DAILY_VERSE_KEY] = entry

        with self.store.exclusive():
            self.store.update(put_slot)
            self._drop_legacy()

    def _migrate_legacy(self, now: datetime) -> Optional[VerseResponse]:
        backend = self.store.backend
        try:
            date = backend.get(LEGACY_DATE_KEY)
            data = backend.get(LEGACY_DATA_KEY)
        except Exception as e:
            logger.warning(f"Legacy daily verse unreadable: {e}")
            return None

        if data is None or date != today_token(now):
            return None

        try:
            response = VerseResponse.model_validate_json(data)
        except Exception as e:
            logger.warning(f"Discarding corrupt legacy daily verse: {e}")
            return None

        logger.info(f"Migrating legacy daily verse: {response.reference}")
        self._store(response, now)
        return response

    def _drop_legacy(self) -> None:
        try:
            self.store.backend.pop(LEGACY_DATA_KEY, None)
            self.store.backend.pop(LEGACY_DATE_KEY, None)
        except Exception as e:
            logger.warning(f"Failed to remove legacy daily verse keys: {e}")
