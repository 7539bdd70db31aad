"""crawlcore.engine: Точка входа для запуска обхода одним вызовом."""

from __future__ import annotations

from typing import List, Optional

from crawlcore.config import CrawlConfig
from crawlcore.crawler.crawler import AsyncCrawler
from crawlcore.crawler.models import CrawlStats, Page
from crawlcore.crawler.registry import CrawlRegistry

__all__ = ["start_crawl", "run_crawl"]


async def run_crawl(
    seed: str,
    cfg: CrawlConfig,
    registry: Optional[CrawlRegistry] = None,
) -> tuple[List[Page], CrawlStats]:
    """
    Запускает AsyncCrawler в контексте и возвращает страницы и статистику.

    Parameters
    ----------
    seed : str
        Стартовый адрес.
    cfg : CrawlConfig
        Конфигурация обхода.
    registry : CrawlRegistry, optional
        Общий реестр посещённых адресов (по умолчанию новый).
    """
    async with AsyncCrawler(cfg, registry=registry) as crawler:
        pages = await crawler.crawl(seed)
    return pages, crawler.stats


async def start_crawl(seed: str, cfg: CrawlConfig) -> List[Page]:
    """Обходит сайт начиная с seed и возвращает список Page в порядке завершения."""
    pages, _ = await run_crawl(seed, cfg)
    return pages
