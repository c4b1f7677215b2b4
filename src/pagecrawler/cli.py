"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pagecrawler.config import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_PAGES,
    DEFAULT_OUTPUT_DIR,
    CrawlBudget,
    CrawlConfig,
)
from pagecrawler.core import CrawlController
from pagecrawler.errors import CrawlerError
from pagecrawler.fetch import DEFAULT_TIMEOUT_S, DEFAULT_USER_AGENT
from pagecrawler.report import print_summary
from pagecrawler.urls import is_crawlable

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(verbose: bool) -> None:
    """Send package logs to stderr; DEBUG when verbose, otherwise errors only."""
    logger = logging.getLogger("pagecrawler")
    logger.setLevel(logging.DEBUG if verbose else logging.ERROR)
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; defaults mirror CrawlConfig."""
    parser = argparse.ArgumentParser(
        prog="pagecrawler",
        description="Download pages breadth-first from a start URL, bounded by depth and page count.",
    )
    parser.add_argument("-u", "--url", required=True, help="Start URL (e.g. https://example.com)")
    parser.add_argument(
        "-d", "--depth", type=int, default=DEFAULT_MAX_DEPTH,
        help=f"Maximum link depth to follow (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "-o", "--output", default=DEFAULT_OUTPUT_DIR,
        help=f"Directory to save pages into (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "-m", "--max-pages", type=int, default=DEFAULT_MAX_PAGES,
        help=f"Maximum pages to download (default: {DEFAULT_MAX_PAGES})",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT_S,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_S:g})",
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--workers", type=int, default=1, help="Concurrent fetchers (default: 1)")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-page progress and summary")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crawler CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if not is_crawlable(args.url):
            raise ValueError(f"Invalid start URL: {args.url}")
        config = CrawlConfig(
            start_url=args.url,
            output_dir=args.output,
            budget=CrawlBudget(max_depth=args.depth, max_pages=args.max_pages),
            timeout_s=args.timeout,
            user_agent=args.user_agent,
            workers=args.workers,
            progress=not args.quiet,
        )
        summary = CrawlController(config).run()
    except (ValueError, CrawlerError) as e:
        sys.stderr.write(f"Fatal error: {e}\n")
        return 1
    except Exception as e:
        log.debug("Unhandled error", exc_info=True)
        sys.stderr.write(f"Fatal error: {type(e).__name__}: {e}\n")
        return 1

    if not args.quiet:
        print_summary(summary)
    print(f"Crawl finished. Pages downloaded: {summary.fetched}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
