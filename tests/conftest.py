"""
Pytest configuration and shared fixtures for VerseKeeper tests.

Provides sample passages, a call-counting fake fetcher, an adjustable
clock and in-memory cache stores.
"""

import os
import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

from verse_keeper.api.api_exceptions import BibleAPIError
from verse_keeper.config.settings import Settings
from verse_keeper.core.cache_store import CacheStore
from verse_keeper.models.verse import VerseLine, VerseResponse

# Fixed local zone so calendar-day tests do not depend on the host
LOCAL_TZ = timezone(timedelta(hours=-5))


def make_response(
    reference: str = "John 3:16",
    text: str = "For God so loved the world, that he gave his one and only Son.\n",
    translation_id: str = "web",
    translation_name: str = "World English Bible",
    book_id: str = "JHN",
    book_name: str = "John",
    chapter: int = 3,
    verse: int = 16,
) -> VerseResponse:
    """Build a single-verse passage."""
    return VerseResponse(
        reference=reference,
        verses=[
            VerseLine(book_id=book_id, book_name=book_name, chapter=chapter, verse=verse, text=text)
        ],
        text=text,
        translation_id=translation_id,
        translation_name=translation_name,
        translation_note="Public Domain",
    )


class FakeClock:
    """Callable clock returning a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeFetcher:
    """Verse fetcher recording every call."""

    def __init__(
        self,
        response: Optional[VerseResponse] = None,
        random_response: Optional[VerseResponse] = None,
        error: Optional[BibleAPIError] = None,
    ):
        self.response = response or make_response()
        self.random_response = random_response or make_response(
            reference="Psalm 23:1",
            text="Yahweh is my shepherd: I shall lack nothing.\n",
            book_id="PSA",
            book_name="Psalms",
            chapter=23,
            verse=1,
        )
        self.error = error
        self.calls: List[tuple] = []
        self.random_calls: List[str] = []

    async def fetch_verse(self, reference: str, translation: str) -> VerseResponse:
        self.calls.append((reference, translation))
        if self.error:
            raise self.error
        return self.response

    async def fetch_random_verse(self, translation: str) -> VerseResponse:
        self.random_calls.append(translation)
        if self.error:
            raise self.error
        return self.random_response


@pytest.fixture
def sample_response() -> VerseResponse:
    """John 3:16 in the World English Bible."""
    return make_response()


@pytest.fixture
def sample_payload() -> bytes:
    """bible-api.com JSON body for John 3:16."""
    return (
        b'{"reference":"John 3:16","verses":[{"book_id":"JHN","book_name":"John",'
        b'"chapter":3,"verse":16,"text":"For God so loved the world, that he gave '
        b'his one and only Son.\\n"}],"text":"For God so loved the world, that he gave '
        b'his one and only Son.\\n","translation_id":"web","translation_name":'
        b'"World English Bible","translation_note":"Public Domain"}'
    )


@pytest.fixture
def clock() -> FakeClock:
    """Clock at 2026-03-10 09:30 local time."""
    return FakeClock(datetime(2026, 3, 10, 9, 30, tzinfo=LOCAL_TZ))


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def memory_store() -> CacheStore:
    """Cache store backed by a plain dict."""
    return CacheStore.in_memory()


@pytest.fixture
def clean_cache(tmp_path: Path) -> Path:
    """Provide a clean cache directory for testing."""
    cache_dir = tmp_path / "test_cache"
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> Settings:
    """Settings isolated from the user's home directory and environment."""
    for key in list(os.environ):
        if key.upper().startswith("VERSE_KEEPER_"):
            monkeypatch.delenv(key)
    return Settings(
        cache_directory=tmp_path / "cache",
        log_directory=tmp_path / "logs",
        config_file=tmp_path / "config.json",
    )
