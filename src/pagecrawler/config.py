"""
Crawl limits and run configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pagecrawler.fetch import DEFAULT_TIMEOUT_S, DEFAULT_USER_AGENT

DEFAULT_MAX_DEPTH = 2
DEFAULT_MAX_PAGES = 10
DEFAULT_OUTPUT_DIR = "downloads"
# Fan-out cap: new links accepted from a single page
MAX_LINKS_PER_PAGE = 10


@dataclass(frozen=True, slots=True)
class CrawlBudget:
    """Depth and page-count limits, fixed for the whole run."""
    max_depth: int = DEFAULT_MAX_DEPTH
    max_pages: int = DEFAULT_MAX_PAGES

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {self.max_pages}")


@dataclass(frozen=True, slots=True)
class CrawlConfig:
    """Everything one run needs: seed, output directory, limits and transport settings."""
    start_url: str
    output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR
    budget: CrawlBudget = field(default_factory=CrawlBudget)
    timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT
    max_links_per_page: int = MAX_LINKS_PER_PAGE
    workers: int = 1
    progress: bool = False

    def __post_init__(self) -> None:
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got {self.timeout_s}")
        if self.max_links_per_page < 1:
            raise ValueError(f"max_links_per_page must be >= 1, got {self.max_links_per_page}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
