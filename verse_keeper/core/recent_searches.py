"""
Recently searched references.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from typing import Any, List

from ..utils.logger import get_logger

logger = get_logger(__name__)

RECENT_SEARCHES_KEY = "recentSearches"
MAX_RECENT_SEARCHES = 10


class RecentSearches:
    """
    Most-recent-first list of search queries kept in a mapping-like backend.

    Queries differing only in case count as the same search.
    """

    def __init__(self, backend: Any, limit: int = MAX_RECENT_SEARCHES):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.backend = backend
        self.limit = limit

    def items(self) -> List[str]:
        """Stored queries, most recent first."""
        try:
            stored = self.backend.get(RECENT_SEARCHES_KEY)
        except Exception as e:
            logger.warning(f"Recent searches unreadable: {e}")
            return []
        if not isinstance(stored, list):
            return []
        return [query for query in stored if isinstance(query, str)]

    def add(self, query: str) -> None:
        """Move ``query`` to the front, dropping older duplicates and overflow."""
        query = query.strip()
        if not query:
            return
        searches = [q for q in self.items() if q.lower() != query.lower()]
        searches.insert(0, query)
        self._save(searches[:self.limit])

    def clear(self) -> None:
        self._save([])

    def _save(self, searches: List[str]) -> None:
        try:
            self.backend[RECENT_SEARCHES_KEY] = searches
        except Exception as e:
            logger.warning(f"Failed to save recent searches: {e}")
