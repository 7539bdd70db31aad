from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from crawlcore.config import CrawlConfig
from crawlcore.crawler.clock import Clock
from crawlcore.crawler.fetcher import RateLimitedFetcher
from crawlcore.crawler.link_extractor import extract_links
from crawlcore.crawler.models import ContentFetcher, CrawlStats, CrawlTask, LinkExtractor, Page
from crawlcore.crawler.registry import CrawlRegistry
from crawlcore.errors import CrawlAborted, ExtractionError, FetchError, InvalidSeed
from crawlcore.logger import logger
from crawlcore.utils import extract_host, normalize_address

__all__ = ("AdmissionGate", "AsyncCrawler")


class AdmissionGate:
    """Counting gate bounding simultaneously active fetch/parse operations."""

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.limit = limit
        self.active = 0
        self.peak = 0
        self._sem = asyncio.Semaphore(limit)

    async def __aenter__(self) -> AdmissionGate:
        await self._sem.acquire()
        self.active += 1
        self.peak = max(self.peak, self.active)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.active -= 1
        self._sem.release()


class AsyncCrawler:
    """Асинхронный краулер: обход в ширину с лимитами глубины, доменов и параллелизма."""

    def __init__(
        self,
        config: CrawlConfig,
        fetcher: Optional[ContentFetcher] = None,
        extractor: Optional[LinkExtractor] = None,
        registry: Optional[CrawlRegistry] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config
        self._owns_fetcher = fetcher is None
        self.fetcher: ContentFetcher = fetcher or RateLimitedFetcher(config, clock=clock)
        self.extract: LinkExtractor = extractor or extract_links
        self.registry = registry or CrawlRegistry()
        self.stats = CrawlStats()
        self._session_open = False

    async def __aenter__(self) -> AsyncCrawler:
        if self._owns_fetcher:
            await self.fetcher.open()  # type: ignore[attr-defined]
            self._session_open = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_fetcher:
            await self.fetcher.close()  # type: ignore[attr-defined]
            self._session_open = False

    async def crawl(self, start_url: str) -> List[Page]:
        """
        Crawl from *start_url* and return stored pages in completion order.

        Outside ``async with`` the default fetcher's session is opened for
        this call only. Raises InvalidSeed before any work if the seed is
        not an absolute http(s) URL, and CrawlAborted if the orchestration
        itself fails.
        """
        try:
            seed = normalize_address(start_url)
        except ValueError as exc:
            raise InvalidSeed(start_url, str(exc)) from exc

        if self._owns_fetcher and not self._session_open:
            async with self:
                return await self._run(seed)
        return await self._run(seed)

    async def _run(self, seed: str) -> List[Page]:
        logger.info("Старт обхода: %s (max_depth=%d)", seed, self.config.max_depth)
        start = time.monotonic()
        self.stats = CrawlStats()
        stored_before = len(self.registry.all_pages())

        queue: asyncio.Queue[CrawlTask] = asyncio.Queue()
        gate = AdmissionGate(self.config.concurrency_limit)
        if self.registry.claim(seed):
            queue.put_nowait(CrawlTask(seed, 0))
        else:
            logger.info("Seed already visited: %s", seed)

        workers = [
            asyncio.create_task(self._worker(queue, gate))
            for _ in range(self.config.concurrency_limit)
        ]
        joiner = asyncio.create_task(queue.join())
        try:
            await asyncio.wait([joiner, *workers], return_when=asyncio.FIRST_COMPLETED)
            failed = [w for w in workers if w.done() and not w.cancelled() and w.exception()]
        finally:
            for t in (joiner, *workers):
                t.cancel()
            await asyncio.gather(joiner, *workers, return_exceptions=True)

        self.stats.peak_in_flight = gate.peak
        if failed:
            cause = failed[0].exception()
            logger.error("Обход прерван: %s", cause)
            raise CrawlAborted(f"Crawl of {seed} aborted: {cause}") from cause

        pages = self.registry.all_pages()
        duration = time.monotonic() - start
        stored = len(pages) - stored_before
        logger.info(
            "Завершено: %d страниц за %.2f с (%.2f стр/с)",
            stored, duration, stored / duration if duration else 0,
        )
        return pages

    async def _worker(self, queue: asyncio.Queue[CrawlTask], gate: AdmissionGate) -> None:
        while True:
            task = await queue.get()
            try:
                links = await self._process(task, gate)
                self._schedule(queue, task, links)
            finally:
                queue.task_done()

    async def _process(self, task: CrawlTask, gate: AdmissionGate) -> List[str]:
        """Fetch, extract and record one task; per-task failures yield no links."""
        if task.depth > self.config.max_depth:
            return []
        host = extract_host(task.url)
        async with gate:
            if self.registry.domain_count(host) >= self.config.max_pages_per_domain:
                self.stats.quota_skipped += 1
                logger.warning("Skipping %s: domain page limit reached", task.url)
                return []

            logger.info("Fetching (depth %d): %s", task.depth, task.url)
            try:
                content = await self.fetcher.fetch(task.url)
                links = self.extract(task.url, content)
            except FetchError as exc:
                self.stats.fetch_failures += 1
                logger.warning("Failed %s: %s", task.url, exc)
                return []
            except ExtractionError as exc:
                self.stats.extraction_failures += 1
                logger.warning("%s", exc)
                return []
            except Exception:
                self.stats.fetch_failures += 1
                logger.exception("Unexpected error while processing %s", task.url)
                return []

        self.registry.record_page(Page(task.url, task.depth, content, tuple(links)))
        self.stats.pages_stored += 1
        return links

    def _schedule(self, queue: asyncio.Queue[CrawlTask], task: CrawlTask, links: List[str]) -> None:
        """Claim newly discovered links and queue them one level deeper."""
        self.stats.links_discovered += len(links)
        next_depth = task.depth + 1
        if next_depth > self.config.max_depth:
            self.stats.depth_discarded += len(links)
            return
        for link in links:
            if self.registry.claim(link):
                queue.put_nowait(CrawlTask(link, next_depth))
            else:
                self.stats.duplicate_links += 1
