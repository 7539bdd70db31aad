"""
CrawlCore package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from crawlcore.config import CrawlConfig, load_config
from crawlcore.engine import start_crawl

__all__ = ["__version__", "CrawlConfig", "load_config", "start_crawl"]
