"""
Custom exception classes for remote verse fetching.

Provides a granular exception hierarchy so callers can tell a reference
that does not exist apart from an offline device or a bad payload, and
render a matching message.

Author: Kasim Lyee <lyee@codewithlyee.com>
Organization: Softlite Inc.
License: MIT
"""

from typing import Optional


class BibleAPIError(Exception):
    """Base exception for all remote fetch errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        """
        Initialize API error.

        Args:
            message: Human-readable error description
            status_code: HTTP status code if applicable
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Message suitable for showing to the user."""
        return self.message


class InvalidReferenceError(BibleAPIError):
    """Raised when a reference cannot be turned into a request URL."""

    def __init__(self, message: str = "Invalid URL for the request."):
        super().__init__(message)


class VerseNotFoundError(BibleAPIError):
    """Raised when the reference does not resolve to a passage (HTTP 404)."""

    def __init__(self, message: str = "Verse not found"):
        super().__init__(message, status_code=404)

    @property
    def user_message(self) -> str:
        return "Verse not found. Try a reference like John 3:16."


class HTTPStatusError(BibleAPIError):
    """Raised for any other non-2xx response."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"Server returned HTTP {status_code}.", status_code=status_code)


class NetworkError(BibleAPIError):
    """Raised when the request fails at the transport level."""

    def __init__(self, cause: Exception, message: Optional[str] = None):
        self.cause = cause
        super().__init__(message or f"Network error: {cause}")


class DecodingError(BibleAPIError):
    """Raised when a successful response body is not a valid passage."""

    def __init__(self, cause: Exception, message: Optional[str] = None):
        self.cause = cause
        super().__init__(message or f"Failed to decode response: {cause}")
