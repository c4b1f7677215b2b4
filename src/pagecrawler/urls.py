"""
URL normalization and link filtering.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlsplit

CRAWLABLE_SCHEMES: frozenset[str] = frozenset(("http", "https"))


def is_absolute_url(url: Optional[str]) -> bool:
    """Return True when *url* parses with both a scheme and a host."""
    if not url:
        return False
    try:
        parsed = urlsplit(url)
        return bool(parsed.scheme) and bool(parsed.hostname)
    except ValueError:
        return False


def is_crawlable(url: Optional[str]) -> bool:
    """Return True for absolute http(s) URLs."""
    if not is_absolute_url(url):
        return False
    return urlsplit(url).scheme.lower() in CRAWLABLE_SCHEMES


def normalize_url(href: Optional[str], base_url: str) -> Optional[str]:
    """
    Resolve a raw ``href`` against ``base_url``.

    - Empty or whitespace-only hrefs are unusable
    - Protocol-relative ``//host/path`` gets an ``https:`` scheme
    - Root-relative ``/path`` keeps only scheme and host of the base
    - Hrefs with their own scheme are returned unchanged
    - Everything else goes through standard relative resolution

    Returns None for anything that cannot become an absolute URL. Never raises.
    Non-http schemes (``mailto:``, ``ftp:``) are passed through; use
    :func:`is_crawlable` to drop them.
    """
    if href is None:
        return None
    href = href.strip()
    if not href:
        return None

    if href.startswith("//"):
        candidate = "https:" + href
        return candidate if is_absolute_url(candidate) else None

    if href.startswith("/"):
        if not is_absolute_url(base_url):
            return None
        base = urlsplit(base_url)
        candidate = f"{base.scheme}://{base.netloc}{href}"
        return candidate if is_absolute_url(candidate) else None

    try:
        scheme = urlsplit(href).scheme
    except ValueError:
        return None

    if scheme:
        if scheme.lower() in CRAWLABLE_SCHEMES and not is_absolute_url(href):
            return None
        return href

    try:
        joined = urljoin(base_url, href)
    except ValueError:
        return None
    return joined if is_absolute_url(joined) else None
