"""
Saved favorite passages.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

import threading
from typing import Any, List

from pydantic import TypeAdapter

from ..models.verse import FavoriteVerse, VerseResponse
from ..utils.logger import get_logger

logger = get_logger(__name__)

FAVORITES_KEY = "com.versekeeper.favorites"

_FAVORITES_ADAPTER = TypeAdapter(List[FavoriteVerse])


class FavoritesStore:
    """
    Favorites persisted as one JSON list, unique by reference.

    Unreadable data is treated as an empty list, like the verse cache.
    """

    def __init__(self, backend: Any):
        self.backend = backend
        self._lock = threading.RLock()

    def items(self) -> List[FavoriteVerse]:
        """Favorites, newest first."""
        # Later additions win ties on saved_at
        return sorted(reversed(self._load()), key=lambda favorite: favorite.saved_at, reverse=True)

    def is_favorited(self, reference: str) -> bool:
        return any(favorite.reference == reference for favorite in self._load())

    def add(self, response: VerseResponse) -> FavoriteVerse:
        """
        Save ``response`` as a favorite, replacing one with the same reference.

        Returns:
            The stored favorite
        """
        favorite = FavoriteVerse.from_response(response)
        with self._lock:
            favorites = [f for f in self._load() if f.reference != favorite.reference]
            favorites.append(favorite)
            self._save(favorites)
        logger.info(f"Favorite added: {favorite.reference}")
        return favorite

    def remove(self, reference: str) -> bool:
        """
        Remove the favorite for ``reference``.

        Returns:
            True if a favorite was removed
        """
        with self._lock:
            favorites = self._load()
            remaining = [f for f in favorites if f.reference != reference]
            if len(remaining) == len(favorites):
                return False
            self._save(remaining)
        logger.info(f"Favorite removed: {reference}")
        return True

    def toggle(self, response: VerseResponse) -> bool:
        """
        Add ``response`` if it is not a favorite, otherwise remove it.

        Returns:
            True if the passage is a favorite afterwards
        """
        with self._lock:
            if self.remove(response.reference):
                return False
            self.add(response)
            return True

    def _load(self) -> List[FavoriteVerse]:
        try:
            blob = self.backend.get(FAVORITES_KEY)
            if blob is None:
                return []
            return _FAVORITES_ADAPTER.validate_json(blob)
        except Exception as e:
            logger.warning(f"Discarding unreadable favorites: {e}")
            return []

    def _save(self, favorites: List[FavoriteVerse]) -> None:
        try:
            self.backend[FAVORITES_KEY] = _FAVORITES_ADAPTER.dump_json(favorites)
        except Exception as e:
            logger.warning(f"Failed to save favorites: {e}")
