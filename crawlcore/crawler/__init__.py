"""
Crawler core: orchestrator, rate-limited fetcher, link extractor and registry.
"""
from crawlcore.crawler.crawler import AdmissionGate, AsyncCrawler
from crawlcore.crawler.fetcher import RateLimitedFetcher
from crawlcore.crawler.link_extractor import extract_links
from crawlcore.crawler.models import CrawlStats, CrawlTask, Page
from crawlcore.crawler.registry import CrawlRegistry
from crawlcore.crawler.throttle import HostThrottle

__all__ = [
    "AdmissionGate",
    "AsyncCrawler",
    "RateLimitedFetcher",
    "extract_links",
    "CrawlStats",
    "CrawlTask",
    "Page",
    "CrawlRegistry",
    "HostThrottle",
]
