"""
Unit tests for the bible-api.com client.

Tests request construction, status handling, payload decoding and
retry of network failures.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock
import aiohttp

from verse_keeper.api.bible_api_client import BibleAPIClient
from verse_keeper.api.api_exceptions import (
    DecodingError,
    HTTPStatusError,
    InvalidReferenceError,
    NetworkError,
    VerseNotFoundError,
)
from verse_keeper.models.verse import VerseResponse


def mock_response(status=200, body=b"", text=""):
    response = AsyncMock()
    response.status = status
    response.read = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=text)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def client_with(response=None, side_effect=None, max_attempts=1):
    session = AsyncMock()
    if side_effect is not None:
        session.get = MagicMock(side_effect=side_effect)
    else:
        session.get = MagicMock(return_value=response)

    client = BibleAPIClient(max_attempts=max_attempts)
    client.session = session
    return client, session


class TestBibleAPIClient:
    """Tests for BibleAPIClient class."""

    def test_initialization(self):
        """Test client initialization."""
        client = BibleAPIClient()
        assert client.base_url == "https://bible-api.com"
        assert client.max_attempts == 3
        assert client.session is None

    def test_initialization_invalid_arguments(self):
        """Test validation of retry and timeout settings."""
        with pytest.raises(ValueError, match="max_attempts"):
            BibleAPIClient(max_attempts=0)

        with pytest.raises(ValueError, match="timeout"):
            BibleAPIClient(timeout=0)

    def test_trailing_slash_stripped(self):
        """Test base URL normalization."""
        assert BibleAPIClient(base_url="http://localhost:8080/").base_url == "http://localhost:8080"

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test async context manager usage."""
        async with BibleAPIClient() as client:
            assert client.session is not None
            assert isinstance(client.session, aiohttp.ClientSession)
        assert client.session is None

    @pytest.mark.asyncio
    async def test_fetch_verse_not_initialized(self):
        """Test error when fetching without context manager."""
        client = BibleAPIClient()

        with pytest.raises(RuntimeError, match="Client not initialized"):
            await client.fetch_verse("John 3:16")

    @pytest.mark.asyncio
    async def test_fetch_verse_success(self, sample_payload):
        """Test successful passage fetching and request shape."""
        client, session = client_with(mock_response(200, sample_payload))

        passage = await client.fetch_verse("John 3:16", "kjv")

        assert isinstance(passage, VerseResponse)
        assert passage.reference == "John 3:16"
        assert passage.verses[0].id == "JHN.3.16"
        assert passage.translation_id == "web"

        url = session.get.call_args.args[0]
        assert url == "https://bible-api.com/John%203:16"
        assert session.get.call_args.kwargs["params"] == {"translation": "kjv"}

    @pytest.mark.asyncio
    async def test_fetch_random_verse(self, sample_payload):
        """Test the random verse request."""
        client, session = client_with(mock_response(200, sample_payload))

        passage = await client.fetch_random_verse("web")

        assert passage.reference == "John 3:16"
        assert session.get.call_args.args[0] == "https://bible-api.com/"
        assert session.get.call_args.kwargs["params"] == {"random": "verse", "translation": "web"}

    @pytest.mark.asyncio
    async def test_fetch_verse_empty_reference(self):
        """Test that blank references are rejected before any request."""
        client, session = client_with(mock_response(200))

        with pytest.raises(InvalidReferenceError):
            await client.fetch_verse("   ")
        session.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_verse_not_found(self):
        """Test handling of 404 responses."""
        client, _ = client_with(mock_response(404, text='{"error":"not found"}'))

        with pytest.raises(VerseNotFoundError) as exc_info:
            await client.fetch_verse("Hezekiah 1:1")

        assert exc_info.value.status_code == 404
        assert "Try a reference like John 3:16" in exc_info.value.user_message

    @pytest.mark.asyncio
    async def test_fetch_verse_http_error(self):
        """Test handling of other non-200 statuses."""
        client, _ = client_with(mock_response(500, text="Internal Server Error"))

        with pytest.raises(HTTPStatusError) as exc_info:
            await client.fetch_verse("John 3:16")

        assert exc_info.value.status_code == 500
        assert "HTTP 500" in exc_info.value.user_message

    @pytest.mark.asyncio
    async def test_fetch_verse_malformed_payload(self):
        """Test handling of a 200 response that is not a passage."""
        client, _ = client_with(mock_response(200, b'{"reference": "John 3:16"}'))

        with pytest.raises(DecodingError):
            await client.fetch_verse("John 3:16")

    @pytest.mark.asyncio
    async def test_fetch_verse_network_error(self):
        """Test that transport failures become NetworkError."""
        client, _ = client_with(side_effect=aiohttp.ClientConnectionError("connection refused"))

        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_verse("John 3:16")

        assert isinstance(exc_info.value.cause, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_fetch_verse_timeout(self):
        """Test that timeouts become NetworkError."""
        client, _ = client_with(side_effect=asyncio.TimeoutError())

        with pytest.raises(NetworkError):
            await client.fetch_verse("John 3:16")

    @pytest.mark.asyncio
    async def test_network_error_retried(self, sample_payload, monkeypatch):
        """Test that a transient network failure is retried."""
        monkeypatch.setattr(asyncio, "sleep", AsyncMock())
        client, session = client_with(
            side_effect=[aiohttp.ClientConnectionError("reset"), mock_response(200, sample_payload)],
            max_attempts=2,
        )

        passage = await client.fetch_verse("John 3:16")

        assert passage.reference == "John 3:16"
        assert session.get.call_count == 2

    @pytest.mark.asyncio
    async def test_http_error_not_retried(self):
        """Test that HTTP errors fail on the first attempt."""
        client, session = client_with(mock_response(503, text="busy"), max_attempts=3)

        with pytest.raises(HTTPStatusError):
            await client.fetch_verse("John 3:16")

        assert session.get.call_count == 1
