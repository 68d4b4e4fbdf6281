"""
Interface the verse cache expects from a remote verse source.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models.verse import VerseResponse


@runtime_checkable
class VerseFetcher(Protocol):
    """
    Remote source of passages.

    ``fetch_verse`` raises ``VerseNotFoundError``, ``HTTPStatusError``,
    ``NetworkError`` or ``DecodingError``; ``fetch_random_verse`` raises the
    same set except ``VerseNotFoundError``.
    """

    async def fetch_verse(self, reference: str, translation: str) -> VerseResponse:
        ...

    async def fetch_random_verse(self, translation: str) -> VerseResponse:
        ...
