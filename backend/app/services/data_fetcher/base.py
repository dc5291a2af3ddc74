"""
Shared HTTP plumbing for stock-data providers.

Every provider owns one aiohttp session with a bounded total timeout and a
per-minute request window. ``_fetch`` never raises: any transport error,
non-2xx status or exhausted window is logged and reported as ``None`` so the
caller can move on to the next tier.
"""
import asyncio
from typing import Optional, Dict, Any

import aiohttp
from loguru import logger

from app.services.data_fetcher.rate_limiter import RateLimiter


class HTTPDataProvider:
    """Base class for key-authenticated JSON APIs."""

    name = "provider"
    key_param = "apikey"

    def __init__(self, api_key: str, requests_per_minute: int, timeout_seconds: float):
        self.api_key = api_key
        self.rate_limiter = RateLimiter(max_requests=requests_per_minute, time_window=60, name=self.name)
        self.timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)
            )
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def _fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """Make an authenticated GET request and return the decoded JSON body."""
        if not self.is_available:
            return None

        if not self.rate_limiter.try_acquire():
            logger.warning(f"{self.name} rate limit window exhausted, skipping {url}")
            return None

        params = dict(params or {})
        params[self.key_param] = self.api_key

        try:
            session = await self._get_session()
            async with session.get(url, params=params) as resp:
                if resp.status in (401, 403):
                    logger.error(f"{self.name} authentication failed - check API key")
                    return None
                if resp.status == 429:
                    logger.warning(f"{self.name} rate limit hit")
                    return None
                if resp.status != 200:
                    logger.warning(f"{self.name} returned status {resp.status} for {url}")
                    return None
                return await resp.json(content_type=None)
        except asyncio.TimeoutError:
            logger.warning(f"{self.name} request timed out after {self.timeout_seconds}s: {url}")
            return None
        except Exception as e:
            logger.error(f"{self.name} request failed for {url}: {e}")
            return None
