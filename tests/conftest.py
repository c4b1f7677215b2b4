"""Shared fakes: an in-memory web and HTML builders."""
import threading
from typing import Dict, List, Optional

import pytest

from pagecrawler.config import CrawlBudget, CrawlConfig
from pagecrawler.core import CrawlController
from pagecrawler.errors import FetchError
from pagecrawler.links import extract_hrefs
from pagecrawler.storage import PageStore

SEED = "https://example.com/"


def page(*hrefs: str) -> str:
    """Build a small HTML document linking to *hrefs* in order."""
    anchors = "".join(f'<a href="{h}">link</a>' for h in hrefs)
    return f"<html><head><title>t</title></head><body>{anchors}</body></html>"


class FakeWeb:
    """Serves canned pages; unknown URLs answer 404."""

    def __init__(self, pages: Optional[Dict[str, str]] = None, failures: Optional[Dict[str, int]] = None):
        self.pages = dict(pages or {})
        # url -> number of times it fails before succeeding
        self.failures = dict(failures or {})
        self.calls: List[str] = []
        self.closed = False
        self._lock = threading.Lock()

    def fetch(self, url: str) -> str:
        with self._lock:
            self.calls.append(url)
            remaining = self.failures.get(url, 0)
            if remaining:
                self.failures[url] = remaining - 1
                raise FetchError(url, "HTTP 503", status_code=503)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404", status_code=404)
        return self.pages[url]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_controller(tmp_path):
    def _make(web, start_url=SEED, max_depth=2, max_pages=10, store=None, extractor=extract_hrefs, **options):
        config = CrawlConfig(
            start_url=start_url,
            output_dir=tmp_path / "out",
            budget=CrawlBudget(max_depth=max_depth, max_pages=max_pages),
            **options,
        )
        return CrawlController(
            config,
            fetcher=web,
            extractor=extractor,
            store=store or PageStore(config.output_dir),
        )

    return _make
