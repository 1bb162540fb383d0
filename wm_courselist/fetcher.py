"""
HTTP page fetching for the Open Course List, backed by aiohttp
"""

import asyncio
import logging
from typing import Dict, Optional

import aiohttp

from .config import validate_user_agent
from .errors import TransportError


class PageFetcher:
    """GETs pages with an identifying User-Agent header.

    One aiohttp session is opened lazily and reused until ``close()``.
    Failures are wrapped in TransportError and never retried.
    """

    def __init__(self, user_agent: str,
                 session: Optional[aiohttp.ClientSession] = None,
                 logger: Optional[logging.Logger] = None):
        self.user_agent = validate_user_agent(user_agent)
        self.logger = logger or logging.getLogger(__name__)
        self._session = session
        self._owns_session = session is None

    @property
    def headers(self) -> Dict[str, str]:
        return {'User-Agent': self.user_agent}

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self.headers)
            self._owns_session = True
        return self._session

    async def fetch(self, url: str, params: Optional[Dict[str, str]] = None) -> str:
        """Return the body of ``url`` as text"""
        session = self._get_session()
        self.logger.debug(f"GET {url} params={params}")
        try:
            async with session.get(url, params=params, headers=self.headers) as response:
                response.raise_for_status()
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            raise TransportError(url, e) from e

    async def close(self):
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
