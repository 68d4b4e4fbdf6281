"""
Unit tests for data models.

Tests passage decoding, display helpers, favorites and categories.
"""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from verse_keeper.models.category import ALL_CATEGORIES, get_category
from verse_keeper.models.verse import FavoriteVerse, VerseLine, VerseResponse, local_now, local_zone
from verse_keeper.utils.text import trim_verse
from tests.conftest import make_response


class TestVerseLine:
    """Tests for VerseLine model."""

    def test_id(self):
        """Test the composite identifier."""
        line = VerseLine(book_id="ROM", book_name="Romans", chapter=8, verse=28, text="...")
        assert line.id == "ROM.8.28"

    def test_invalid_numbers(self):
        """Test that chapter and verse must be positive."""
        with pytest.raises(ValidationError):
            VerseLine(book_id="ROM", book_name="Romans", chapter=0, verse=1, text="...")

    def test_immutable(self):
        """Test that verse lines are frozen."""
        line = VerseLine(book_id="ROM", book_name="Romans", chapter=8, verse=28, text="...")
        with pytest.raises(ValidationError):
            line.verse = 29


class TestVerseResponse:
    """Tests for VerseResponse model."""

    def test_decode_api_payload(self, sample_payload):
        """Test decoding the snake_case wire format."""
        response = VerseResponse.model_validate_json(sample_payload)

        assert response.reference == "John 3:16"
        assert response.translation_name == "World English Bible"
        assert response.translation_note == "Public Domain"
        assert response.verses[0].book_name == "John"

    def test_missing_translation_note_defaults(self):
        """Test that translation_note is optional."""
        response = VerseResponse.model_validate_json(
            b'{"reference":"Gen 1:1","verses":[],"text":"In the beginning","translation_id":"kjv",'
            b'"translation_name":"King James Version"}'
        )
        assert response.translation_note == ""
        assert response.first_verse is None

    def test_missing_required_field(self):
        """Test that payloads without text are rejected."""
        with pytest.raises(ValidationError):
            VerseResponse.model_validate_json(b'{"reference":"Gen 1:1"}')

    def test_trimmed_text(self):
        """Test whitespace collapsing for display."""
        response = make_response(text="  For God\nso loved \n\n the world\n")
        assert response.trimmed_text == "For God so loved the world"

    def test_multi_verse_passage(self):
        """Test verse ordering is preserved."""
        lines = [
            VerseLine(book_id="ROM", book_name="Romans", chapter=8, verse=n, text=f"v{n}\n")
            for n in (28, 29, 30)
        ]
        response = VerseResponse(
            reference="Romans 8:28-30", verses=lines, text="v28\nv29\nv30\n",
            translation_id="web", translation_name="World English Bible",
        )
        assert [line.verse for line in response.verses] == [28, 29, 30]
        assert response.first_verse.verse == 28


class TestFavoriteVerse:
    """Tests for FavoriteVerse model."""

    def test_from_response(self, sample_response):
        """Test building a favorite from a passage."""
        favorite = FavoriteVerse.from_response(sample_response)

        assert favorite.reference == "John 3:16"
        assert favorite.text == sample_response.text.strip()
        assert favorite.book_name == "John"
        assert (favorite.chapter, favorite.verse) == (3, 16)
        assert favorite.translation_name == "World English Bible"
        assert favorite.saved_at.tzinfo is not None


class TestCategories:
    """Tests for curated categories."""

    def test_ten_categories_with_references(self):
        """Test the curated set."""
        assert len(ALL_CATEGORIES) == 10
        assert all(len(category.verse_references) == 10 for category in ALL_CATEGORIES)
        assert len({category.id for category in ALL_CATEGORIES}) == 10

    def test_get_category(self):
        """Test lookup by identifier."""
        assert get_category("Hope").name == "Hope"
        assert "John 3:16" in get_category("love").verse_references

    def test_unknown_category(self):
        """Test lookup of a missing identifier."""
        with pytest.raises(KeyError, match="Unknown category"):
            get_category("joy")


class TestTrimVerse:
    """Tests for trim_verse helper."""

    def test_collapses_whitespace(self):
        assert trim_verse("\tBlessed   are\n the meek ") == "Blessed are the meek"

    def test_empty(self):
        assert trim_verse("   ") == ""


class TestLocalClock:
    """Tests for the local clock."""

    def test_zone_from_tz_variable(self, monkeypatch):
        """Test that TZ selects a zone with daylight-saving rules."""
        monkeypatch.setenv("TZ", "America/New_York")
        zone = local_zone()

        assert zone == ZoneInfo("America/New_York")
        assert datetime(2026, 7, 1, tzinfo=zone).utcoffset() == timedelta(hours=-4)
        assert datetime(2026, 12, 1, tzinfo=zone).utcoffset() == timedelta(hours=-5)

    def test_unknown_tz_falls_back_to_fixed_offset(self, monkeypatch):
        monkeypatch.setenv("TZ", "Nowhere/Atlantis")
        assert datetime.now(local_zone()).utcoffset() is not None

    def test_local_now_is_aware(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")
        now = local_now()

        assert now.tzinfo == ZoneInfo("America/New_York")
        assert now.utcoffset() is not None
