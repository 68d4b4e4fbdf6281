"""
Curated verse categories grouped by mood or life situation.

Author: Kasim Lyee <lyee@codewithlyee.com>
Organization: Softlite Inc.
License: MIT
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class VerseCategory(BaseModel):
    """
    A named collection of verse references.

    Attributes:
        id: Stable identifier (e.g. "comfort")
        name: Display name
        description: Short subtitle
        verse_references: Ordered references browsed within the category
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    verse_references: Tuple[str, ...] = Field(..., min_length=1)


ALL_CATEGORIES: List[VerseCategory] = [
    VerseCategory(
        id="comfort",
        name="Comfort",
        description="When you need reassurance",
        verse_references=(
            "Psalm 23:4", "Psalm 34:18", "Isaiah 41:10", "Isaiah 43:2",
            "Matthew 5:4", "Matthew 11:28-30", "2 Corinthians 1:3-4",
            "Romans 8:28", "Psalm 147:3", "Revelation 21:4",
        ),
    ),
    VerseCategory(
        id="peace",
        name="Peace",
        description="For a calm and quiet spirit",
        verse_references=(
            "John 14:27", "Philippians 4:6-7", "Isaiah 26:3", "Psalm 46:10",
            "Colossians 3:15", "Romans 15:13", "Numbers 6:24-26", "Psalm 4:8",
            "Isaiah 32:17", "2 Thessalonians 3:16",
        ),
    ),
    VerseCategory(
        id="hope",
        name="Hope",
        description="Light in difficult times",
        verse_references=(
            "Jeremiah 29:11", "Romans 15:13", "Romans 8:24-25", "Hebrews 11:1",
            "Psalm 42:11", "Lamentations 3:22-23", "Isaiah 40:31", "Psalm 130:5",
            "1 Peter 1:3", "Romans 5:3-5",
        ),
    ),
    VerseCategory(
        id="courage",
        name="Courage",
        description="Strength to face your fears",
        verse_references=(
            "Joshua 1:9", "Deuteronomy 31:6", "Isaiah 41:13", "Psalm 27:1",
            "2 Timothy 1:7", "Isaiah 43:1", "Psalm 56:3-4", "Proverbs 28:1",
            "1 Corinthians 16:13", "Ephesians 6:10",
        ),
    ),
    VerseCategory(
        id="love",
        name="Love",
        description="God's unconditional love",
        verse_references=(
            "1 Corinthians 13:4-7", "John 3:16", "Romans 8:38-39", "1 John 4:7-8",
            "1 John 4:19", "Ephesians 3:17-19", "Psalm 136:1", "Zephaniah 3:17",
            "John 15:12-13", "Romans 5:8",
        ),
    ),
    VerseCategory(
        id="strength",
        name="Strength",
        description="When you feel overwhelmed",
        verse_references=(
            "Philippians 4:13", "Isaiah 40:29", "Psalm 73:26",
            "2 Corinthians 12:9-10", "Nehemiah 8:10", "Psalm 18:32",
            "Ephesians 3:16", "Psalm 28:7", "Isaiah 41:10", "Habakkuk 3:19",
        ),
    ),
    VerseCategory(
        id="anxiety",
        name="Anxiety & Fear",
        description="Release your worries",
        verse_references=(
            "1 Peter 5:7", "Philippians 4:6-7", "Matthew 6:25-27", "Psalm 55:22",
            "Isaiah 41:10", "Psalm 94:19", "Matthew 6:34", "Deuteronomy 31:8",
            "Psalm 23:4", "Luke 12:25-26",
        ),
    ),
    VerseCategory(
        id="gratitude",
        name="Gratitude",
        description="Cultivate a thankful heart",
        verse_references=(
            "1 Thessalonians 5:18", "Psalm 107:1", "Colossians 3:17",
            "Psalm 100:4-5", "Psalm 136:1", "James 1:17", "Philippians 4:4-6",
            "Psalm 9:1", "Ephesians 5:20", "Psalm 118:24",
        ),
    ),
    VerseCategory(
        id="wisdom",
        name="Wisdom",
        description="Guidance for life's decisions",
        verse_references=(
            "Proverbs 3:5-6", "James 1:5", "Proverbs 2:6", "Psalm 111:10",
            "Proverbs 4:7", "Colossians 2:2-3", "Proverbs 16:16",
            "Ecclesiastes 7:12", "Proverbs 9:10", "Psalm 119:105",
        ),
    ),
    VerseCategory(
        id="forgiveness",
        name="Forgiveness",
        description="Grace and new beginnings",
        verse_references=(
            "1 John 1:9", "Ephesians 4:32", "Colossians 3:13", "Psalm 103:12",
            "Isaiah 1:18", "Micah 7:18-19", "Acts 3:19", "Matthew 6:14-15",
            "Psalm 32:5", "2 Chronicles 7:14",
        ),
    ),
]

_BY_ID: Dict[str, VerseCategory] = {category.id: category for category in ALL_CATEGORIES}


def get_category(category_id: str) -> VerseCategory:
    """
    Look up a category by identifier.

    Raises:
        KeyError: If no category has that identifier
    """
    try:
        return _BY_ID[category_id.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown category: {category_id}") from None
