"""
Anchor extraction from fetched HTML.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup, SoupStrainer

from pagecrawler.errors import ParseError

# SoupStrainer to parse only <a> tags (faster link extraction)
LINK_STRAINER = SoupStrainer("a", href=True)


def extract_hrefs(html: str) -> List[str]:
    """
    Return the raw href of every anchor in document order.

    Duplicates are kept; the caller decides what to do with them.

    Raises:
        ParseError: if the document cannot be parsed.
    """
    try:
        soup = BeautifulSoup(html, "lxml", parse_only=LINK_STRAINER)
        return [a["href"] for a in soup.find_all("a") if a.get("href") is not None]
    except (ValueError, TypeError, AttributeError) as e:
        raise ParseError(f"could not parse HTML: {e}") from e
