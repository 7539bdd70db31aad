# crawlcore/crawler/registry.py
"""
Visited registry and result store shared by all crawl workers.
"""
from __future__ import annotations

import threading
from typing import Dict, List, Set

from crawlcore.crawler.models import Page
from crawlcore.utils import extract_host


class CrawlRegistry:
    """
    Claim set, append-only page list and per-host page counters.

    Every public method is one critical section under a single lock and never
    awaits, so it is safe from any number of tasks or threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._visited: Set[str] = set()
        self._pages: List[Page] = []
        self._per_host: Dict[str, int] = {}

    def claim(self, url: str) -> bool:
        """Record *url* and return True the first time; False on every later call."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def record_page(self, page: Page) -> None:
        """Store *page* and bump the counter of its host."""
        host = extract_host(page.url)
        with self._lock:
            self._pages.append(page)
            if host:
                self._per_host[host] = self._per_host.get(host, 0) + 1

    def domain_count(self, host: str) -> int:
        with self._lock:
            return self._per_host.get(host, 0)

    def domain_counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._per_host)

    def visited_count(self) -> int:
        with self._lock:
            return len(self._visited)

    def all_pages(self) -> List[Page]:
        """Snapshot of stored pages in the order they were recorded."""
        with self._lock:
            return list(self._pages)
