"""Process-local feed store."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional, Sequence

from feedcache.cache.store import (
    DeletionCompletion,
    FeedStore,
    InsertionCompletion,
    RetrievalCompletion,
)
from feedcache.models import CachedFeed, LocalFeedImage
from feedcache.result import Success


class InMemoryFeedStore(FeedStore):
    """Keeps the cached feed in memory and completes every call synchronously.

    A lock makes each operation atomic with respect to other threads;
    completions run after the lock is released so they may call back into
    the store.
    """

    def __init__(self, cache: Optional[CachedFeed] = None) -> None:
        self._lock = threading.Lock()
        self._cache = cache

    def delete_cached_feed(self, completion: DeletionCompletion) -> None:
        with self._lock:
            self._cache = None
        completion(None)

    def insert(
        self,
        feed: Sequence[LocalFeedImage],
        timestamp: datetime,
        completion: InsertionCompletion,
    ) -> None:
        with self._lock:
            self._cache = CachedFeed(feed=tuple(feed), timestamp=timestamp)
        completion(None)

    def retrieve(self, completion: RetrievalCompletion) -> None:
        with self._lock:
            cache = self._cache
        completion(Success(cache))
