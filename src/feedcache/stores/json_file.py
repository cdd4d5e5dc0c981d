"""Feed store persisting the cache as a single JSON file.

The file holds a serialised :class:`~feedcache.models.CachedFeed`::

    {"feed": [{"id": "...", "description": null, "location": null,
               "url": "https://..."}],
     "timestamp": "2024-05-01T09:00:00Z"}

Writes go through :func:`~feedcache.config.atomic_write`, so a crash during
insertion leaves either the previous cache or the new one, never a partial
file.  A missing file is an empty cache; an unreadable or undecodable file
is a retrieval failure, which :meth:`~feedcache.cache.LocalFeedLoader.validate_cache`
answers by deleting it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from feedcache.cache.store import (
    DeletionCompletion,
    FeedStore,
    InsertionCompletion,
    RetrievalCompletion,
)
from feedcache.config import atomic_write
from feedcache.exceptions import StoreError
from feedcache.models import CachedFeed, LocalFeedImage
from feedcache.result import Failure, Success
from feedcache.stores._serial import SerialQueue, store_closed_error

logger = logging.getLogger(__name__)


class JsonFileFeedStore(FeedStore):
    """File-backed :class:`~feedcache.cache.store.FeedStore`.

    Operations run on a private single-worker queue and their completions
    are called on that worker thread.

    Args:
        path: Location of the cache file.  Parent directories are created
            on first insertion.

    Example::

        with JsonFileFeedStore(get_cache_dir() / "feed.json") as store:
            store.retrieve(on_retrieved)
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._queue = SerialQueue("feedcache-json-store")

    def __enter__(self) -> JsonFileFeedStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def path(self) -> Path:
        """The filesystem path of the cache file."""
        return self._path

    def close(self) -> None:
        """Finish pending operations and stop the worker thread.

        Operations issued afterwards complete immediately, on the calling
        thread, with a :class:`~feedcache.exceptions.StoreError`.
        """
        self._queue.shutdown()

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
        if not self._path.exists():
            completion(Success(None))
            return
        try:
            cache = CachedFeed.model_validate_json(self._path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.debug("Cannot read feed cache at %s: %s", self._path, exc)
            error = StoreError(f"Cannot read feed cache at {self._path}")
            error.__cause__ = exc
            completion(Failure(error))
            return
        completion(Success(cache))

    def _insert(self, cache: CachedFeed, completion: InsertionCompletion) -> None:
        try:
            atomic_write(self._path, cache.model_dump_json())
        except OSError as exc:
            logger.debug("Cannot write feed cache at %s: %s", self._path, exc)
            error = StoreError(f"Cannot write feed cache at {self._path}")
            error.__cause__ = exc
            completion(error)
            return
        logger.debug("Wrote %d image(s) to %s", len(cache.feed), self._path)
        completion(None)

    def _delete(self, completion: DeletionCompletion) -> None:
        if not self._path.exists():
            completion(None)
            return
        try:
            self._path.unlink()
        except OSError as exc:
            logger.debug("Cannot delete feed cache at %s: %s", self._path, exc)
            error = StoreError(f"Cannot delete feed cache at {self._path}")
            error.__cause__ = exc
            completion(error)
            return
        logger.debug("Deleted feed cache at %s", self._path)
        completion(None)
