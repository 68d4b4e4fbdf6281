"""
Reference search flow.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..api.api_exceptions import BibleAPIError, VerseNotFoundError
from ..models.verse import VerseResponse
from ..utils.logger import get_logger
from .recent_searches import RecentSearches
from .reference_cache import ReferenceCachePolicy

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Verse not found. Try e.g. John 3:16"


@dataclass
class SearchResult:
    """Outcome of a search: a passage or a message to show instead."""

    query: str
    response: Optional[VerseResponse] = None
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.response is not None


class SearchService:
    """
    Look up a typed reference through the reference cache.

    The translation is read from ``translation_provider`` on every search so
    a changed preference applies immediately.
    """

    def __init__(
        self,
        policy: ReferenceCachePolicy,
        recent: RecentSearches,
        translation_provider: Callable[[], str],
    ):
        self.policy = policy
        self.recent = recent
        self.translation_provider = translation_provider

    async def search(self, query: str) -> Optional[SearchResult]:
        """
        Search for ``query``.

        Returns:
            None for blank input, otherwise the result. Fetch errors are
            turned into ``error_message``; a missing reference gets its own
            message.
        """
        query = query.strip()
        if not query:
            return None

        try:
            response = await self.policy.get_or_fetch(query, self.translation_provider())
        except VerseNotFoundError:
            logger.info(f"No passage for search: {query}")
            return SearchResult(query=query, error_message=NOT_FOUND_MESSAGE)
        except BibleAPIError as e:
            logger.warning(f"Search failed for {query}: {e}")
            return SearchResult(query=query, error_message=e.user_message)

        self.recent.add(query)
        return SearchResult(query=query, response=response)
