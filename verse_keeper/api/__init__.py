"""Remote verse fetching against bible-api.com."""

from .api_exceptions import (
    BibleAPIError,
    DecodingError,
    HTTPStatusError,
    InvalidReferenceError,
    NetworkError,
    VerseNotFoundError,
)
from .bible_api_client import BibleAPIClient
from .fetcher import VerseFetcher

__all__ = [
    "BibleAPIClient",
    "BibleAPIError",
    "DecodingError",
    "HTTPStatusError",
    "InvalidReferenceError",
    "NetworkError",
    "VerseFetcher",
    "VerseNotFoundError",
]
