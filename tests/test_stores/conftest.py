"""Helpers for exercising concrete feed stores from synchronous tests."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

import pytest

from feedcache.cache.store import FeedStore, RetrievalResult
from feedcache.models import LocalFeedImage

TIMEOUT = 5


class BlockingStore:
    """Wraps a :class:`FeedStore` and waits for each completion before returning."""

    def __init__(self, store: FeedStore, timeout: float = TIMEOUT) -> None:
        self.store = store
        self._timeout = timeout

    def retrieve(self) -> RetrievalResult:
        return self._call(self.store.retrieve)

    def insert(self, feed: Sequence[LocalFeedImage], timestamp: datetime) -> Optional[Exception]:
        return self._call(self.store.insert, feed, timestamp)

    def delete(self) -> Optional[Exception]:
        return self._call(self.store.delete_cached_feed)

    def _call(self, method: Callable[..., None], *args: Any) -> Any:
        done = threading.Event()
        received: list = []

        def completion(value: Any) -> None:
            received.append(value)
            done.set()

        method(*args, completion)
        assert done.wait(self._timeout), f"{method.__name__} did not complete"
        assert len(received) == 1
        return received[0]


@pytest.fixture
def blocking() -> Callable[[FeedStore], BlockingStore]:
    return BlockingStore
