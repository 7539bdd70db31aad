# crawlcore/crawler/link_extractor.py
"""
Link extraction for CrawlCore: absolute http(s) addresses in document order.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from crawlcore.errors import ExtractionError
from crawlcore.logger import logger
from crawlcore.utils import normalize_address


def extract_links(source_url: str, content: str) -> List[str]:
    """
    Extract outbound links from the markup in *content*.

    Every ``<a href>`` is resolved against *source_url*; links that are not
    http/https or cannot be resolved are skipped. Duplicates are kept, the
    caller decides what to schedule.
    """
    try:
        soup = BeautifulSoup(content, "html.parser")
    except Exception as exc:
        raise ExtractionError(source_url, exc) from exc

    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        try:
            links.append(normalize_address(urljoin(source_url, href_val.strip())))
        except ValueError:
            continue
    logger.debug("Found %d links on page: %s", len(links), source_url)
    return links
