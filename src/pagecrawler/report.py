"""
Per-page crawl outcomes and the end-of-run summary.
"""
from __future__ import annotations

import enum
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class Outcome(enum.Enum):
    SUCCESS = "success"
    FETCH_ERROR = "fetch_error"
    PARSE_ERROR = "parse_error"
    STORAGE_ERROR = "storage_error"


@dataclass(slots=True)
class CrawlResult:
    """Result data for a single attempted page."""
    url: str
    depth: int
    outcome: Outcome
    saved_path: Optional[Path] = None
    error: Optional[str] = None
    links_found: int = 0

    @property
    def saved(self) -> bool:
        return self.saved_path is not None


@dataclass(slots=True)
class CrawlSummary:
    """Aggregate numbers for a finished run."""
    attempted: int = 0
    fetched: int = 0
    failed: int = 0
    failures: List[CrawlResult] = field(default_factory=list)
    elapsed_s: float = 0.0


class ResultReporter:
    """Collects crawl results in the order pages were attempted."""

    def __init__(self) -> None:
        self._results: List[CrawlResult] = []
        self._started = time.monotonic()

    def record(self, result: CrawlResult) -> CrawlResult:
        self._results.append(result)
        return result

    @property
    def results(self) -> List[CrawlResult]:
        return list(self._results)

    def summary(self) -> CrawlSummary:
        failures = [r for r in self._results if r.outcome is not Outcome.SUCCESS]
        return CrawlSummary(
            attempted=len(self._results),
            fetched=sum(1 for r in self._results if r.saved),
            failed=sum(1 for r in self._results if not r.saved),
            failures=failures,
            elapsed_s=time.monotonic() - self._started,
        )


def print_scan_line(result: CrawlResult) -> None:
    """Print single scan result line."""
    if result.outcome is Outcome.SUCCESS:
        line = f"  → OK   [d={result.depth}] {result.url} -> {result.saved_path} (+{result.links_found} links)"
    elif result.outcome is Outcome.PARSE_ERROR:
        line = f"  → OK   [d={result.depth}] {result.url} -> {result.saved_path} (links unparsed: {result.error})"
    else:
        line = f"  ✗ ERR  [d={result.depth}] {result.url}: {result.error}"
    sys.stderr.write(line + "\n")
    sys.stderr.flush()


def print_summary(summary: CrawlSummary) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("\n" + "=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Pages attempted:        {summary.attempted}\n")
    sys.stderr.write(f"Pages downloaded:       {summary.fetched}\n")
    sys.stderr.write(f"Pages failed:           {summary.failed}\n")
    sys.stderr.write(f"Elapsed:                {summary.elapsed_s:.1f}s\n\n")

    if summary.failures:
        sys.stderr.write("Problems:\n")
        for r in summary.failures:
            sys.stderr.write(f"  [{r.outcome.value}] {r.url}: {r.error}\n")
    else:
        sys.stderr.write("No errors encountered.\n")

    sys.stderr.write("\n")
