"""Feed store backed by a :mod:`diskcache` directory.

The cached feed lives under a single key, serialised as JSON so the on-disk
value does not depend on pickling the model classes.  Unlike an expiring
response cache, no ``expire`` is set: staleness is decided by
:mod:`feedcache.cache.policy` and stale entries are removed by
:meth:`~feedcache.cache.LocalFeedLoader.validate_cache`.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

import diskcache
from pydantic import ValidationError

from feedcache.cache.store import (
    DeletionCompletion,
    FeedStore,
    InsertionCompletion,
    RetrievalCompletion,
)
from feedcache.exceptions import StoreError
from feedcache.models import CachedFeed, LocalFeedImage
from feedcache.result import Failure, Success
from feedcache.stores._serial import SerialQueue, store_closed_error

logger = logging.getLogger(__name__)

FEED_KEY = "feed"

_DISK_ERRORS = (OSError, sqlite3.Error, diskcache.Timeout)


class DiskCacheFeedStore(FeedStore):
    """:class:`~feedcache.cache.store.FeedStore` on top of :class:`diskcache.Cache`.

    Operations run on a private single-worker queue and their completions
    are called on that worker thread.

    Args:
        directory: Root directory of the cache.  A ``feed/`` subdirectory is
            created inside it.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory) / "feed"
        self._cache: Optional[diskcache.Cache] = diskcache.Cache(str(self._directory))
        self._queue = SerialQueue("feedcache-disk-store")

    def __enter__(self) -> DiskCacheFeedStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Finish pending operations, then close the underlying :class:`diskcache.Cache`.

        Operations issued afterwards complete immediately with a
        :class:`~feedcache.exceptions.StoreError`.
        """
        self._queue.shutdown()
        if self._cache is not None:
            self._cache.close()
            self._cache = None

    def stats(self) -> dict[str, Any]:
        """Return ``directory`` and whether a feed is currently ``cached``."""
        return {
            "directory": str(self._directory),
            "cached": self._cache is not None and FEED_KEY in self._cache,
        }

    # ------------------------------------------------------------------ #
    # FeedStore
    # ------------------------------------------------------------------ #

    def retrieve(self, completion: RetrievalCompletion) -> None:
        if self._queue.submit(self._retrieve, completion) is None:
            completion(Failure(store_closed_error()))

    def insert(
        self,
        feed: Sequence[LocalFeedImage],
        timestamp: datetime,
        completion: InsertionCompletion,
    ) -> None:
        cache = CachedFeed(feed=tuple(feed), timestamp=timestamp)
        if self._queue.submit(self._insert, cache, completion) is None:
            completion(store_closed_error())

    def delete_cached_feed(self, completion: DeletionCompletion) -> None:
        if self._queue.submit(self._delete, completion) is None:
            completion(store_closed_error())

    # ------------------------------------------------------------------ #
    # Worker-thread implementations
    # ------------------------------------------------------------------ #

    def _retrieve(self, completion: RetrievalCompletion) -> None:
        assert self._cache is not None, "Store is closed"
        try:
            raw = self._cache.get(FEED_KEY)
            cache = None if raw is None else CachedFeed.model_validate_json(raw)
        except (*_DISK_ERRORS, ValidationError) as exc:
            logger.debug("Cannot read feed from %s: %s", self._directory, exc)
            error = StoreError(f"Cannot read feed from {self._directory}")
            error.__cause__ = exc
            completion(Failure(error))
            return
        completion(Success(cache))

    def _insert(self, cache: CachedFeed, completion: InsertionCompletion) -> None:
        assert self._cache is not None, "Store is closed"
        try:
            self._cache.set(FEED_KEY, cache.model_dump_json())
        except _DISK_ERRORS as exc:
            logger.debug("Cannot write feed to %s: %s", self._directory, exc)
            error = StoreError(f"Cannot write feed to {self._directory}")
            error.__cause__ = exc
            completion(error)
            return
        completion(None)

    def _delete(self, completion: DeletionCompletion) -> None:
        assert self._cache is not None, "Store is closed"
        try:
            self._cache.delete(FEED_KEY)
        except _DISK_ERRORS as exc:
            logger.debug("Cannot delete feed from %s: %s", self._directory, exc)
            error = StoreError(f"Cannot delete feed from {self._directory}")
            error.__cause__ = exc
            completion(error)
            return
        completion(None)
