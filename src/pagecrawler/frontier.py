"""
Frontier queue and visited-set bookkeeping for a single crawl run.
"""
from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Set


@dataclass(frozen=True, slots=True)
class WorkItem:
    """A URL waiting to be fetched, tagged with its hop count from the seed."""
    url: str
    depth: int


class FrontierQueue:
    """FIFO queue of work items; ties keep discovery order."""

    def __init__(self) -> None:
        self._items: Deque[WorkItem] = deque()

    def push(self, item: WorkItem) -> None:
        """Append *item* behind everything already queued."""
        self._items.append(item)

    def pop(self) -> Optional[WorkItem]:
        """Return the oldest item, or None when the queue is empty."""
        if not self._items:
            return None
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


class VisitedSet:
    """
    URLs fetched during the current run.

    Insertions are permanent for the lifetime of the instance. All mutations
    happen under one lock, so check-and-insert is atomic when a worker pool
    shares the set.
    """

    def __init__(self) -> None:
        self._urls: Set[str] = set()
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    def contains(self, url: str) -> bool:
        with self._lock:
            return url in self._urls

    def add(self, url: str) -> bool:
        """Insert *url*; return True if it was not already present."""
        with self._lock:
            self._in_flight.discard(url)
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def claim(self, url: str, limit: int) -> bool:
        """
        Reserve *url* for fetching.

        Succeeds only if the URL is neither visited nor already claimed and
        visited plus claimed URLs stay below *limit*. A successful claim must
        be followed by :meth:`release`.
        """
        with self._lock:
            if url in self._urls or url in self._in_flight:
                return False
            if len(self._urls) + len(self._in_flight) >= limit:
                return False
            self._in_flight.add(url)
            return True

    def release(self, url: str, fetched: bool) -> None:
        """Finish a claim; a fetched URL becomes visited, a failed one is freed."""
        with self._lock:
            self._in_flight.discard(url)
            if fetched:
                self._urls.add(url)

    @property
    def in_flight(self) -> int:
        with self._lock:
            return len(self._in_flight)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)
