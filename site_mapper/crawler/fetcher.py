"""
Fetcher module: performs a single HTTP GET and streams the response body.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from aiohttp import ClientError, ClientSession

logger = logging.getLogger(__name__)

#: size of the body chunks handed to the HTML tokeniser
CHUNK_SIZE: int = 16 * 1024


class FetchError(Exception):
    """Transport failure, timeout or non-2xx response for *url*."""

    def __init__(self, url: str, reason: str, status: int | None = None) -> None:
        super().__init__(f"fetching {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class Fetcher:
    """Streams page bodies over a shared aiohttp session; redirects are followed."""

    def __init__(self, session: ClientSession, chunk_size: int = CHUNK_SIZE) -> None:
        self.session = session
        self.chunk_size = chunk_size

    @asynccontextmanager
    async def get(self, url: str) -> AsyncIterator[AsyncIterator[bytes]]:
        """
        GET *url* and yield an async iterator over the body bytes.

        The response is released when the ``async with`` block exits, on every
        path. Raises FetchError on a non-2xx status and on transport errors,
        including ones raised while the body is being read.
        """
        logger.debug("GET %s", url)
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"unexpected status {resp.status}", status=resp.status)
                yield resp.content.iter_chunked(self.chunk_size)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
