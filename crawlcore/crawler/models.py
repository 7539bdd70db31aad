"""
Data models for the CrawlCore crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Callable, List, NamedTuple, Protocol, Tuple


@dataclass(frozen=True, slots=True)
class Page:
    """A fetched and parsed page: address, depth, raw content and outbound links."""

    url: str
    depth: int
    content: str
    links: Tuple[str, ...] = ()


class CrawlTask(NamedTuple):
    """One unit of pending work in the frontier."""

    url: str
    depth: int


@dataclass(slots=True)
class CrawlStats:
    """Counters collected during one crawl run."""

    pages_stored: int = 0
    fetch_failures: int = 0
    extraction_failures: int = 0
    quota_skipped: int = 0
    links_discovered: int = 0
    depth_discarded: int = 0
    duplicate_links: int = 0
    peak_in_flight: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class ContentFetcher(Protocol):
    """Anything that can return the text body of one address."""

    async def fetch(self, url: str) -> str:
        ...


LinkExtractor = Callable[[str, str], List[str]]
