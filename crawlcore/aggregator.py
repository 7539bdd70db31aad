"""crawlcore.aggregator: Сводка результатов обхода для CLI и отчётов."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence, TypedDict

from crawlcore.crawler.models import CrawlStats, Page
from crawlcore.utils import extract_host


class PageInfo(TypedDict):
    """Краткая информация о сохранённой странице."""

    url: str
    depth: int
    size: int
    links: List[str]


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода: страницы, счётчики по хостам и глубинам, статистика."""

    seed: str = ""
    pages: List[PageInfo] = field(default_factory=list)
    hosts: Dict[str, int] = field(default_factory=dict)
    depths: Dict[int, int] = field(default_factory=dict)
    stats: Dict[str, int] = field(default_factory=dict)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление CrawlReport."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)

    def summary_lines(self, top: int = 5) -> List[str]:
        """Строки краткого отчёта: первые top страниц и сколько ещё найдено."""
        lines = [
            f"- URL: {p['url']} | Depth: {p['depth']} | Content Size: {p['size']} bytes"
            for p in self.pages[:top]
        ]
        if len(self.pages) > top:
            lines.append(f"...and {len(self.pages) - top} more pages were found.")
        return lines


def _page_info(page: Page) -> PageInfo:
    return PageInfo(
        url=page.url,
        depth=page.depth,
        size=len(page.content.encode("utf-8")),
        links=list(page.links),
    )


def aggregate_results(
    pages: Sequence[Page],
    stats: Optional[CrawlStats] = None,
    seed: str = "",
) -> CrawlReport:
    """Собирает CrawlReport из списка Page (порядок страниц сохраняется)."""
    hosts = Counter(extract_host(p.url) for p in pages)
    depths = Counter(p.depth for p in pages)
    return CrawlReport(
        seed=seed,
        pages=[_page_info(p) for p in pages],
        hosts=dict(sorted(hosts.items())),
        depths=dict(sorted(depths.items())),
        stats=stats.as_dict() if stats else {},
    )


__all__ = ["PageInfo", "CrawlReport", "aggregate_results"]
