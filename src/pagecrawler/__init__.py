"""
Bounded breadth-first crawler that downloads pages from a start URL.
Follows http(s) links up to a depth limit and a page budget, saving each
page under a sanitized file name.
"""
from pagecrawler.config import CrawlBudget, CrawlConfig
from pagecrawler.core import CrawlController, crawl
from pagecrawler.errors import CrawlerError, FetchError, ParseError, StorageError
from pagecrawler.report import CrawlResult, CrawlSummary, Outcome
from pagecrawler.urls import normalize_url

__version__ = "1.0.0"
__all__ = [
    "crawl",
    "CrawlBudget",
    "CrawlConfig",
    "CrawlController",
    "CrawlResult",
    "CrawlSummary",
    "Outcome",
    "normalize_url",
    "CrawlerError",
    "FetchError",
    "ParseError",
    "StorageError",
]
