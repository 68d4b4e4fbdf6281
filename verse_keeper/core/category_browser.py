"""
Browsing the verses of a curated category.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

import random
from typing import Optional

from ..models.category import VerseCategory
from ..models.verse import VerseResponse
from ..utils.logger import get_logger
from .reference_cache import ReferenceCachePolicy

logger = get_logger(__name__)


class CategoryBrowser:
    """
    Cursor over a category's references, fetching through the reference cache.

    Example:
        >>> browser = CategoryBrowser(get_category("hope"), policy, "web")
        >>> passage = await browser.current_verse()
        >>> browser.progress
        '1 of 10'
    """

    def __init__(
        self,
        category: VerseCategory,
        policy: ReferenceCachePolicy,
        translation: str,
        rng: Optional[random.Random] = None,
    ):
        self.category = category
        self.policy = policy
        self.translation = translation
        self.current_index = 0
        self._rng = rng or random.Random()

    @property
    def current_reference(self) -> str:
        return self.category.verse_references[self.current_index]

    @property
    def progress(self) -> str:
        """Position as "n of total"."""
        return f"{self.current_index + 1} of {len(self.category.verse_references)}"

    @property
    def has_next(self) -> bool:
        return self.current_index < len(self.category.verse_references) - 1

    @property
    def has_previous(self) -> bool:
        return self.current_index > 0

    async def current_verse(self) -> VerseResponse:
        """Passage at the cursor."""
        return await self.policy.get_or_fetch(self.current_reference, self.translation)

    async def next(self) -> Optional[VerseResponse]:
        """Advance and return the passage, or None at the last reference."""
        if not self.has_next:
            return None
        self.current_index += 1
        return await self.current_verse()

    async def previous(self) -> Optional[VerseResponse]:
        """Step back and return the passage, or None at the first reference."""
        if not self.has_previous:
            return None
        self.current_index -= 1
        return await self.current_verse()

    async def shuffle(self) -> VerseResponse:
        """Jump to a random reference other than the current one."""
        choices = [
            index for index in range(len(self.category.verse_references))
            if index != self.current_index
        ]
        if choices:
            self.current_index = self._rng.choice(choices)
        logger.debug(f"Shuffled {self.category.id} to {self.current_reference}")
        return await self.current_verse()
