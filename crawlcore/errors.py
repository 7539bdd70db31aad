"""Exception hierarchy for CrawlCore.

Only :class:`InvalidSeed` and :class:`CrawlAborted` escape :meth:`AsyncCrawler.crawl`;
every other error is isolated to the task that raised it and logged.
"""
from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for all crawler errors."""


class InvalidSeed(CrawlError):
    """Raised when the start address is not an absolute http(s) URL with a host."""

    def __init__(self, url: str, reason: str = "not an absolute http(s) URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid seed {url!r}: {reason}")


class CrawlAborted(CrawlError):
    """Raised when the orchestrator itself fails and the crawl cannot continue."""


class FetchError(CrawlError):
    """Base class for per-task fetch failures."""

    def __init__(self, url: str, message: str, original: Optional[BaseException] = None):
        self.url = url
        self.original = original
        super().__init__(f"{message}: {url}")


class MissingHost(FetchError):
    def __init__(self, url: str):
        super().__init__(url, "Address has no host")


class NetworkError(FetchError):
    def __init__(self, url: str, original: BaseException):
        super().__init__(url, f"Network error ({original})", original)


class FetchTimeout(FetchError):
    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"Timed out after {timeout:.1f}s")


class HttpStatusError(FetchError):
    def __init__(self, url: str, status: int):
        self.status = status
        super().__init__(url, f"HTTP {status}")


class ExtractionError(CrawlError):
    """Raised when a fetched document cannot be parsed for links."""

    def __init__(self, url: str, original: BaseException):
        self.url = url
        self.original = original
        super().__init__(f"Link extraction failed for {url}: {original}")


__all__ = [
    "CrawlError",
    "InvalidSeed",
    "CrawlAborted",
    "FetchError",
    "MissingHost",
    "NetworkError",
    "FetchTimeout",
    "HttpStatusError",
    "ExtractionError",
]
