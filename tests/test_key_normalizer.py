"""
Unit tests for cache key normalization.
"""

import pytest

from verse_keeper.core.key_normalizer import normalize_reference


class TestNormalizeReference:
    """Tests for normalize_reference."""

    def test_simple_reference(self):
        """Test lower-casing, space removal and colon replacement."""
        assert normalize_reference("John 3:16") == "john3_16"

    def test_case_and_space_variants_collapse(self):
        """Test that case and spacing variants share a key."""
        expected = normalize_reference("John 3:16")
        assert normalize_reference("john3:16") == expected
        assert normalize_reference("JOHN 3 : 16") == expected
        assert normalize_reference("  John   3:16  ") == expected

    def test_range_reference(self):
        """Test references with ranges and numbered books."""
        assert normalize_reference("Romans 8:28-30") == "romans8_28-30"
        assert normalize_reference("1 Corinthians 13:4-7") == "1corinthians13_4-7"

    def test_empty_reference(self):
        """Test that an empty reference yields an empty key."""
        assert normalize_reference("") == ""

    def test_only_spaces_are_removed(self):
        """Test that tabs and newlines are not treated as spaces."""
        assert normalize_reference("John\t3:16") == "john\t3_16"

    def test_different_formatting_is_not_guaranteed_equal(self):
        """Test that punctuation differences produce distinct keys."""
        assert normalize_reference("John 3.16") != normalize_reference("John 3:16")

    @pytest.mark.parametrize(
        "reference",
        ["John 3:16", "PSALM 23", "1 John 4:7-8", "", "Song of Solomon 2:4", "john3_16"],
    )
    def test_idempotent(self, reference):
        """Test normalize(normalize(r)) == normalize(r)."""
        once = normalize_reference(reference)
        assert normalize_reference(once) == once

    def test_normalized_keys_never_contain_colon(self):
        """Test that colons are always replaced."""
        assert ":" not in normalize_reference("a:b:c d:e")
