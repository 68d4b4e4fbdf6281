"""
bible-api.com client for fetching scripture text.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..models.verse import VerseResponse
from ..utils.logger import get_logger
from .api_exceptions import (
    DecodingError,
    HTTPStatusError,
    InvalidReferenceError,
    NetworkError,
    VerseNotFoundError,
)

logger = get_logger(__name__)


class BibleAPIClient:
    """
    Async client for the free bible-api.com service.

    Fetches passages by reference or at random and decodes them into
    ``VerseResponse`` models. Transport failures are retried with
    exponential backoff up to ``max_attempts``; HTTP and decoding errors
    are raised immediately.

    Example:
        >>> async with BibleAPIClient() as client:
        ...     passage = await client.fetch_verse("John 3:16", "web")
        ...     print(passage.trimmed_text)
    """

    BASE_URL = "https://bible-api.com"

    # Characters left unescaped in the reference path segment
    _PATH_SAFE = ":,;-"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 15.0,
        max_attempts: int = 3,
    ):
        """
        Initialize API client.

        Args:
            base_url: Service root, without trailing slash
            timeout: Total per-request timeout in seconds
            max_attempts: Attempts per request for network failures (1 disables retry)

        Raises:
            ValueError: If max_attempts is below 1 or timeout is not positive
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.session: Optional[aiohttp.ClientSession] = None

        logger.info(f"BibleAPIClient initialized for {self.base_url}")

    async def __aenter__(self) -> BibleAPIClient:
        self.session = aiohttp.ClientSession(
            headers={"accept": "application/json"},
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )
        logger.debug("API session created")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.session:
            await self.session.close()
            self.session = None
            logger.debug("API session closed")

    async def fetch_verse(self, reference: str, translation: str = "web") -> VerseResponse:
        """
        Fetch a passage by reference.

        Args:
            reference: Passage reference (e.g. "John 3:16", "Romans 8:28-30")
            translation: Translation identifier (e.g. "web", "kjv")

        Returns:
            Decoded passage

        Raises:
            RuntimeError: If client not initialized with context manager
            InvalidReferenceError: If reference is empty
            VerseNotFoundError: If the reference does not resolve (404)
            HTTPStatusError: For other non-200 responses
            NetworkError: For transport failures after all attempts
            DecodingError: If the body is not a valid passage
        """
        reference = reference.strip()
        if not reference:
            raise InvalidReferenceError("Reference cannot be empty")

        url = f"{self.base_url}/{quote(reference, safe=self._PATH_SAFE)}"
        passage = await self._get_passage(url, {"translation": translation}, label=reference)
        logger.info(f"Successfully fetched: {passage.reference} ({passage.translation_id})")
        return passage

    async def fetch_random_verse(self, translation: str = "web") -> VerseResponse:
        """
        Fetch a random verse.

        Args:
            translation: Translation identifier

        Returns:
            Decoded passage

        Raises:
            RuntimeError: If client not initialized with context manager
            HTTPStatusError: For non-200 responses
            NetworkError: For transport failures after all attempts
            DecodingError: If the body is not a valid passage
        """
        url = f"{self.base_url}/"
        passage = await self._get_passage(
            url, {"random": "verse", "translation": translation}, label="random verse"
        )
        logger.info(f"Random verse fetched: {passage.reference}")
        return passage

    async def _get_passage(self, url: str, params: Dict[str, Any], label: str) -> VerseResponse:
        if not self.session:
            raise RuntimeError(
                "Client not initialized. Use async context manager:\n"
                "  async with BibleAPIClient() as client:\n"
                "      passage = await client.fetch_verse(reference)"
            )

        passage: Optional[VerseResponse] = None
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(NetworkError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        f"Retrying {label} (attempt {attempt.retry_state.attempt_number}"
                        f"/{self.max_attempts})"
                    )
                passage = await self._request(url, params, label)
        return passage

    async def _request(self, url: str, params: Dict[str, Any], label: str) -> VerseResponse:
        logger.debug(f"Fetching {label} from {url} with {params}")

        try:
            async with self.session.get(url, params=params) as response:
                if response.status == 404:
                    logger.error(f"Verse not found: {label}")
                    raise VerseNotFoundError(f"Verse not found: {label}")

                if response.status != 200:
                    error_text = await response.text()
                    logger.error(f"API error {response.status} for {label}: {error_text}")
                    raise HTTPStatusError(response.status)

                body = await response.read()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Network error fetching {label}: {e}")
            raise NetworkError(e) from e

        try:
            return VerseResponse.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Malformed payload for {label}: {e}")
            raise DecodingError(e) from e
