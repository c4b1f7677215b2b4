"""
HTTP transport for the crawler.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests
from urllib3.exceptions import HTTPError as Urllib3Error

from pagecrawler.errors import FetchError

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; pagecrawler/1.0)"


class Fetcher:
    """Fetches page bodies over a shared requests session."""

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def fetch(self, url: str) -> str:
        """
        GET *url* and return the body as text.

        Raises:
            FetchError: on network errors, timeouts, unparseable URLs, non-2xx
                responses or an empty body.
        """
        try:
            resp = self.session.get(url, timeout=self.timeout_s, allow_redirects=True)
        except (requests.RequestException, Urllib3Error, ValueError) as e:
            # urllib3 can reject a host (e.g. a label over 63 chars) outside RequestException
            raise FetchError(url, str(e) or type(e).__name__) from e

        if not 200 <= resp.status_code < 300:
            raise FetchError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)

        body = resp.text
        if not body:
            raise FetchError(url, "empty response body", status_code=resp.status_code)

        log.debug("Fetched %s (%d chars)", url, len(body))
        return body

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
