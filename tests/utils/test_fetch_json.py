"""
Tests for best-effort JSON fetching and string helpers.
"""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from metaplex_client.utils import fetch_json, pad_empty_chars, remove_empty_chars


def _session(text=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.text = AsyncMock(return_value=text)
        session.get.return_value.__aenter__.return_value = response
    return session


class TestFetchJson:
    """Test FetchResult outcomes."""

    @pytest.mark.asyncio
    async def test_success(self):
        result = await fetch_json("https://example.com/a.json", session=_session('{"name": "A"}'))

        assert result.ok
        assert result.value == {"name": "A"}

    @pytest.mark.asyncio
    async def test_network_error(self):
        result = await fetch_json(
            "https://example.com/a.json",
            session=_session(error=aiohttp.ClientConnectionError("refused")),
        )

        assert not result.ok
        assert result.value_or_none() is None
        assert isinstance(result.error, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        result = await fetch_json("https://example.com/a.json", session=_session("<html>"))

        assert not result.ok
        assert isinstance(result.error, ValueError)

    @pytest.mark.asyncio
    async def test_empty_uri(self):
        result = await fetch_json("")

        assert not result.ok

    @pytest.mark.asyncio
    async def test_external_session_left_open(self):
        session = _session("{}")
        session.close = AsyncMock()

        await fetch_json("https://example.com/a.json", session=session)

        session.close.assert_not_called()


class TestPadding:
    """Test NUL padding helpers."""

    def test_pad_and_remove(self):
        padded = pad_empty_chars("abc", 8)

        assert padded == "abc\x00\x00\x00\x00\x00"
        assert remove_empty_chars(padded) == "abc"
