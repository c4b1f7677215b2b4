"""
Breadth-first crawl controller.
"""
from __future__ import annotations

import logging
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Set, Tuple, Union

from pagecrawler.config import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_PAGES,
    DEFAULT_OUTPUT_DIR,
    CrawlBudget,
    CrawlConfig,
)
from pagecrawler.errors import FetchError, ParseError, StorageError
from pagecrawler.fetch import Fetcher
from pagecrawler.frontier import FrontierQueue, VisitedSet, WorkItem
from pagecrawler.links import extract_hrefs
from pagecrawler.report import CrawlResult, CrawlSummary, Outcome, ResultReporter, print_scan_line
from pagecrawler.storage import PageStore
from pagecrawler.urls import is_absolute_url, is_crawlable, normalize_url

log = logging.getLogger(__name__)


class PageFetcher(Protocol):
    def fetch(self, url: str) -> str: ...


class PageSink(Protocol):
    def prepare(self) -> Path: ...

    def save(self, url: str, content: str) -> Path: ...


class CrawlController:
    """
    Runs one bounded BFS crawl.

    The frontier, visited set and reporter are rebuilt at the start of every
    :meth:`run`, so a controller never carries state from one run into the
    next.
    """

    def __init__(
        self,
        config: CrawlConfig,
        fetcher: Optional[PageFetcher] = None,
        extractor: Callable[[str], Sequence[str]] = extract_hrefs,
        store: Optional[PageSink] = None,
    ) -> None:
        self.config = config
        self._owns_fetcher = fetcher is None
        self.fetcher: PageFetcher = fetcher or Fetcher(config.timeout_s, config.user_agent)
        self.extractor = extractor
        self.store: PageSink = store or PageStore(config.output_dir)

        self.frontier = FrontierQueue()
        self.visited = VisitedSet()
        self.reporter = ResultReporter()

    @property
    def budget(self) -> CrawlBudget:
        return self.config.budget

    def run(self) -> CrawlSummary:
        """
        Crawl from the configured start URL until the frontier empties or the
        page budget is spent.

        Raises:
            StorageError: if the output directory cannot be prepared. Nothing
                is fetched in that case.
        """
        self.frontier = FrontierQueue()
        self.visited = VisitedSet()
        self.reporter = ResultReporter()
        self.frontier.push(WorkItem(url=self.config.start_url, depth=0))

        try:
            output_dir = self.store.prepare()
            log.info(
                "Starting crawl from %s (max depth %d, max pages %d, workers %d) into %s",
                self.config.start_url, self.budget.max_depth, self.budget.max_pages,
                self.config.workers, output_dir,
            )
            if self.config.workers > 1:
                self._run_pooled()
            else:
                self._run_sequential()
        finally:
            if self._owns_fetcher and isinstance(self.fetcher, Fetcher):
                self.fetcher.close()

        summary = self.reporter.summary()
        log.info("Crawl finished: %d fetched, %d failed", summary.fetched, summary.failed)
        return summary

    def _run_sequential(self) -> None:
        while self.frontier and len(self.visited) < self.budget.max_pages:
            item = self.frontier.pop()
            if not self._admissible(item):
                continue

            content, result = self._fetch_and_save(item)
            if content is not None:
                self.visited.add(item.url)
                self._expand(item, content, result)
            self._record(result)

    def _run_pooled(self) -> None:
        # Workers only fetch and save; frontier, visited set and reporter are
        # touched from this thread alone.
        pending: Dict[Future, WorkItem] = {}
        workers = self.config.workers
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pagecrawler") as pool:
            while True:
                while len(pending) < workers and self.frontier and not self._budget_claimed():
                    item = self.frontier.pop()
                    if not self._admissible(item):
                        continue
                    if not self.visited.claim(item.url, self.budget.max_pages):
                        log.debug("Skip %s: already in flight", item.url)
                        continue
                    pending[pool.submit(self._fetch_and_save, item)] = item

                if not pending:
                    break

                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    item = pending.pop(future)
                    content, result = future.result()
                    self.visited.release(item.url, fetched=content is not None)
                    if content is not None:
                        self._expand(item, content, result)
                    self._record(result)

    def _budget_claimed(self) -> bool:
        return len(self.visited) + self.visited.in_flight >= self.budget.max_pages

    def _admissible(self, item: WorkItem) -> bool:
        if not is_absolute_url(item.url):
            log.debug("Skip %r: not an absolute URL", item.url)
            return False
        if item.url in self.visited:
            log.debug("Skip %s: already fetched", item.url)
            return False
        if item.depth > self.budget.max_depth:
            log.debug("Skip %s: depth %d > %d", item.url, item.depth, self.budget.max_depth)
            return False
        return True

    def _fetch_and_save(self, item: WorkItem) -> Tuple[Optional[str], CrawlResult]:
        try:
            content = self.fetcher.fetch(item.url)
        except FetchError as e:
            log.warning("Fetch failed for %s: %s", item.url, e.reason)
            return None, CrawlResult(item.url, item.depth, Outcome.FETCH_ERROR, error=e.reason)
        except Exception as e:
            log.warning("Unexpected error fetching %s: %r", item.url, e, exc_info=True)
            return None, CrawlResult(item.url, item.depth, Outcome.FETCH_ERROR, error=_describe(e))

        try:
            path = self.store.save(item.url, content)
        except StorageError as e:
            log.warning("Could not save %s: %s", item.url, e)
            return None, CrawlResult(item.url, item.depth, Outcome.STORAGE_ERROR, error=str(e))
        except Exception as e:
            log.warning("Unexpected error saving %s: %r", item.url, e, exc_info=True)
            return None, CrawlResult(item.url, item.depth, Outcome.STORAGE_ERROR, error=_describe(e))

        return content, CrawlResult(item.url, item.depth, Outcome.SUCCESS, saved_path=path)

    def _expand(self, item: WorkItem, content: str, result: CrawlResult) -> None:
        """Queue the accepted links of a fetched page one level deeper."""
        if item.depth >= self.budget.max_depth:
            return

        try:
            hrefs = self.extractor(content)
        except ParseError as e:
            log.warning("Could not extract links from %s: %s", item.url, e)
            result.outcome = Outcome.PARSE_ERROR
            result.error = str(e)
            return
        except Exception as e:
            log.warning("Unexpected error extracting links from %s: %r", item.url, e, exc_info=True)
            result.outcome = Outcome.PARSE_ERROR
            result.error = _describe(e)
            return

        links = self.select_links(hrefs, item.url)
        for link in links:
            self.frontier.push(WorkItem(url=link, depth=item.depth + 1))
        result.links_found = len(links)

    def select_links(self, hrefs: Sequence[str], base_url: str) -> List[str]:
        """
        Normalize *hrefs* against *base_url* and keep the first distinct
        http(s) links not yet visited, up to the per-page cap.
        """
        accepted: List[str] = []
        seen: Set[str] = set()
        for href in hrefs:
            link = normalize_url(href, base_url)
            if link is None or not is_crawlable(link):
                log.debug("Reject link %r on %s", href, base_url)
                continue
            if link in seen or link in self.visited:
                continue
            seen.add(link)
            accepted.append(link)
            if len(accepted) >= self.config.max_links_per_page:
                break
        return accepted

    def _record(self, result: CrawlResult) -> None:
        self.reporter.record(result)
        if self.config.progress:
            print_scan_line(result)


def _describe(exc: BaseException) -> str:
    """Short "Type: message" text for an unexpected exception."""
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


def crawl(
    start_url: str,
    output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_pages: int = DEFAULT_MAX_PAGES,
    **options: Any,
) -> CrawlSummary:
    """
    Crawl *start_url* breadth-first and save pages into *output_dir*.

    Extra keyword arguments are passed to :class:`CrawlConfig`
    (``timeout_s``, ``user_agent``, ``workers``, ``progress``...).
    """
    config = CrawlConfig(
        start_url=start_url,
        output_dir=output_dir,
        budget=CrawlBudget(max_depth=max_depth, max_pages=max_pages),
        **options,
    )
    return CrawlController(config).run()
