"""
Data models for fetched scripture and cached verse entries.

This module provides immutable, type-safe models mirroring the bible-api.com
JSON payload, plus the cache entry wrapper persisted by the verse cache.
Pydantic handles validation and (de)serialization for both the wire format
and the on-disk cache blob.

Author: Kasim Lyee <lyee@codewithlyee.com>
Organization: Softlite Inc.
License: MIT
"""

from __future__ import annotations

import os
from datetime import datetime, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator
from pydantic.config import ConfigDict

from ..utils.text import trim_verse

LOCALTIME_FILE = "/etc/localtime"


def local_zone() -> tzinfo:
    """
    The host's zone with its daylight-saving rules.

    Resolved from ``TZ`` or ``/etc/localtime``. Hosts exposing neither fall
    back to the current fixed UTC offset.
    """
    key = os.environ.get("TZ", "").lstrip(":")
    try:
        if key:
            return ZoneInfo(key)
        with open(LOCALTIME_FILE, "rb") as f:
            return ZoneInfo.from_file(f, key="localtime")
    except (OSError, ValueError, ZoneInfoNotFoundError):
        return datetime.now().astimezone().tzinfo


def local_now() -> datetime:
    """Current time as a timezone-aware datetime in the local zone."""
    return datetime.now(local_zone())


class VerseLine(BaseModel):
    """
    A single numbered verse inside a passage.

    Attributes:
        book_id: Short book identifier (e.g. "JHN")
        book_name: Display name of the book (e.g. "John")
        chapter: Chapter number
        verse: Verse number within the chapter
        text: Verse text as returned by the API
    """

    model_config = ConfigDict(frozen=True)

    book_id: str
    book_name: str
    chapter: int = Field(..., ge=1)
    verse: int = Field(..., ge=1)
    text: str

    @computed_field
    @property
    def id(self) -> str:
        """Identifier combining book, chapter and verse (e.g. "JHN.3.16")."""
        return f"{self.book_id}.{self.chapter}.{self.verse}"


class VerseResponse(BaseModel):
    """
    A passage as returned by bible-api.com.

    ``verses`` and ``text`` describe the same content. ``text`` is used for
    display and ``verses`` for structured numbering; nothing enforces that
    they agree.

    Examples:
        >>> response = VerseResponse.model_validate_json(payload)
        >>> response.reference
        'John 3:16'
    """

    model_config = ConfigDict(frozen=True)

    reference: str
    verses: List[VerseLine] = Field(default_factory=list)
    text: str
    translation_id: str
    translation_name: str
    translation_note: str = ""

    @property
    def trimmed_text(self) -> str:
        """Passage text on a single line with whitespace collapsed."""
        return trim_verse(self.text)

    @property
    def first_verse(self) -> Optional[VerseLine]:
        """First verse of the passage, if any."""
        return self.verses[0] if self.verses else None


class CacheEntry(BaseModel):
    """
    A cached passage with its validity window.

    Attributes:
        value: The cached passage
        cached_at: Instant the entry was written
        expires_at: Instant after which the entry is stale
    """

    model_config = ConfigDict(frozen=True)

    value: VerseResponse
    cached_at: datetime
    expires_at: datetime

    @field_validator("cached_at", "expires_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as local time."""
        if v.tzinfo is None:
            return v.astimezone()
        return v

    @model_validator(mode="after")
    def validate_window(self) -> CacheEntry:
        if self.expires_at <= self.cached_at:
            raise ValueError(
                f"expires_at ({self.expires_at.isoformat()}) must be after "
                f"cached_at ({self.cached_at.isoformat()})"
            )
        return self

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` has moved past ``expires_at``."""
        return now > self.expires_at


class FavoriteVerse(BaseModel):
    """
    A passage the user saved, keyed by its reference.

    Attributes:
        reference: Passage reference (unique among favorites)
        text: Trimmed passage text
        book_name: Book of the first verse
        chapter: Chapter of the first verse
        verse: Number of the first verse
        translation_name: Translation the text was saved in
        saved_at: When the favorite was added
    """

    model_config = ConfigDict(frozen=True)

    reference: str = Field(..., min_length=1)
    text: str
    book_name: str = ""
    chapter: int = 0
    verse: int = 0
    translation_name: str = ""
    saved_at: datetime = Field(default_factory=local_now)

    @classmethod
    def from_response(cls, response: VerseResponse) -> FavoriteVerse:
        """Build a favorite from a fetched passage."""
        first = response.first_verse
        return cls(
            reference=response.reference,
            text=response.text.strip(),
            book_name=first.book_name if first else "",
            chapter=first.chapter if first else 0,
            verse=first.verse if first else 0,
            translation_name=response.translation_name,
        )
