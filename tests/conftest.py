# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web

from crawlcore.config import CrawlConfig
from crawlcore.errors import HttpStatusError
from crawlcore.logger import LOGGER_NAME


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def html(*links: str) -> str:
    """Build a minimal HTML document with one anchor per link."""
    anchors = "".join(f'<a href="{link}">{link}</a>' for link in links)
    return f"<html><body>{anchors}</body></html>"


class FakeWeb:
    """
    In-memory fetcher: maps addresses to bodies or exceptions.

    Records every fetched address and the peak number of concurrent fetches.
    Unknown addresses fail with HTTP 404.
    """

    def __init__(
        self,
        pages: Dict[str, Union[str, BaseException]],
        delay: float = 0.0,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.pages = pages
        self.delay = delay
        self.delays = delays or {}
        self.calls: List[str] = []
        self.active = 0
        self.peak = 0

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delays.get(url, self.delay))
            body = self.pages.get(url)
            if body is None:
                raise HttpStatusError(url, 404)
            if isinstance(body, BaseException):
                raise body
            return body
        finally:
            self.active -= 1


class FakeClock:
    """Manually driven clock; ``sleep`` only records the requested delay."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture()
def make_config() -> Callable[..., CrawlConfig]:
    """Factory for CrawlConfig with fast test defaults."""

    def _make(**overrides) -> CrawlConfig:
        values = dict(
            max_depth=1,
            max_pages_per_domain=100,
            concurrency_limit=4,
            min_request_interval_per_host=0.0,
            user_agent="TestAgent/1.0",
            request_timeout=2.0,
        )
        values.update(overrides)
        return CrawlConfig(**values)

    return _make


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_project_logger():
    """CLI tests reconfigure the project logger; restore propagation for caplog."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest_asyncio.fixture
async def serve_app():
    """Start aiohttp applications on 127.0.0.1; return base URLs, clean up after the test."""
    runners: List[web.AppRunner] = []

    async def _start(app: web.Application, port: int) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _start
    for runner in runners:
        await runner.cleanup()
