"""
Exception types raised by the crawler collaborators.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class CrawlerError(Exception):
    """Base class for every error the crawler raises on purpose."""


class FetchError(CrawlerError):
    """Network failure, timeout, non-2xx status or empty body."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class ParseError(CrawlerError):
    """HTML could not be parsed for links."""


class StorageError(CrawlerError):
    """Output directory or page file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
