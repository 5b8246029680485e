"""
Best-effort retrieval of off-chain JSON documents.

``fetch_json`` never raises for network or decoding problems; it returns a
``FetchResult`` and leaves the decision of what a failure means to the caller.
"""

from __future__ import annotations
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import aiohttp

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either a decoded value or the error that prevented it."""
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or_none(self) -> Optional[T]:
        return self.value if self.ok else None


async def fetch_json(
    uri: str,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: float = 10.0,
) -> FetchResult[Any]:
    """
    Fetch and decode a JSON document.

    Args:
        uri: Document location
        session: Optional aiohttp session to reuse
        timeout: Total request timeout in seconds

    Returns:
        FetchResult holding the decoded JSON or the failure
    """
    if not uri:
        return FetchResult(error=ValueError("empty URI"))

    owns_session = session is None
    if owns_session:
        session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout))
    try:
        async with session.get(uri) as response:
            response.raise_for_status()
            text = await response.text()
        return FetchResult(value=json.loads(text))
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.warning(f"Failed to fetch JSON from {uri}: {e}")
        return FetchResult(error=e)
    finally:
        if owns_session:
            await session.close()
