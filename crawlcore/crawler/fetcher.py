# crawlcore/crawler/fetcher.py
"""
Fetcher module: HTTP GET with a per-host minimum interval and a fixed timeout.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from crawlcore.config import CrawlConfig
from crawlcore.crawler.clock import Clock
from crawlcore.crawler.throttle import HostThrottle
from crawlcore.errors import FetchTimeout, HttpStatusError, MissingHost, NetworkError
from crawlcore.utils import extract_host


class RateLimitedFetcher:
    """Returns the text body of one address, spacing requests per host."""

    def __init__(
        self,
        config: CrawlConfig,
        session: Optional[ClientSession] = None,
        throttle: Optional[HostThrottle] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self.throttle = throttle or HostThrottle(config.min_request_interval_per_host, clock)

    async def __aenter__(self) -> RateLimitedFetcher:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self) -> None:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.request_timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
        if self._owns_session:
            self.session = None

    async def fetch(self, url: str) -> str:
        """
        Fetch *url* and return its body as text.

        Raises MissingHost, FetchTimeout, HttpStatusError or NetworkError.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")
        host = extract_host(url)
        if not host:
            raise MissingHost(url)

        await self.throttle.wait(host)

        try:
            async with self.session.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=ClientTimeout(total=self.config.request_timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise HttpStatusError(url, resp.status)
                return await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise FetchTimeout(url, self.config.request_timeout) from exc
        except ClientError as exc:
            raise NetworkError(url, exc) from exc
