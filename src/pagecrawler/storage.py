"""
Saving fetched pages to disk under sanitized file names.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Union
from urllib.parse import urlsplit

from pagecrawler.errors import StorageError

log = logging.getLogger(__name__)

# Characters rejected in file names on at least one common platform
_INVALID_CHARS = '<>:"/\\|?*' + "".join(chr(i) for i in range(32))
_INVALID_CLASS = "[" + re.escape(_INVALID_CHARS) + "]"
_INVALID_RE = re.compile(rf"({_INVALID_CLASS}*\.+$)|({_INVALID_CLASS}+)")

PAGE_SUFFIX = ".html"


def sanitize_filename(name: str) -> str:
    """Replace invalid characters, trailing dots and spaces with ``_``; lowercase."""
    return _INVALID_RE.sub("_", name).replace(" ", "_").lower()


def page_filename(url: str) -> str:
    """Derive the file name for *url* from its host and path."""
    parsed = urlsplit(url)
    host = parsed.hostname or ""
    path = parsed.path or "/"
    return sanitize_filename(host + path) + PAGE_SUFFIX


class PageStore:
    """Writes page bodies into a single output directory."""

    def __init__(self, output_dir: Union[str, Path]) -> None:
        self.output_dir = Path(output_dir)

    def prepare(self) -> Path:
        """
        Create the output directory if needed.

        Raises:
            StorageError: if the directory cannot be created.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(self.output_dir, f"cannot create output directory: {e}") from e
        return self.output_dir.resolve()

    def path_for(self, url: str) -> Path:
        """Return where the page for *url* is stored (no I/O)."""
        return self.output_dir / page_filename(url)

    def save(self, url: str, content: str) -> Path:
        """Write *content* for *url* and return the path written."""
        path = self.path_for(url)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(path, str(e)) from e
        log.debug("Saved %s -> %s (%d chars)", url, path, len(content))
        return path
