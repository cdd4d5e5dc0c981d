"""Cache-backed feed loader: save, load and validate against a :class:`FeedStore`.

Every operation is a chain of store calls, each continued from the previous
call's completion.  The loader never has more than one outstanding store
request per operation and keeps no state of its own besides the store, the
clock and the close flag.

Continuations only hold a weak reference to the loader.  Once the loader
has been garbage collected or closed, completions that arrive from the
store are dropped and the caller's completion is never invoked.
"""

from __future__ import annotations

import logging
import weakref
from typing import Callable, Iterable, Optional, Sequence

from feedcache.cache.policy import MAX_CACHE_AGE_DAYS, is_valid
from feedcache.cache.store import FeedStore, RetrievalResult
from feedcache.clock import Clock, SystemClock
from feedcache.loader import FeedLoader, LoadCompletion
from feedcache.models import FeedImage, LocalFeedImage
from feedcache.result import Failure, Success

logger = logging.getLogger(__name__)

SaveCompletion = Callable[[Optional[Exception]], None]
ValidationCompletion = Callable[[], None]


class LocalFeedLoader(FeedLoader):
    """Saves, loads and validates the cached feed.

    * :meth:`save` deletes the current cache and, only if that succeeded,
      inserts the new feed stamped with ``clock.now()``.
    * :meth:`load` serves the cache while it is younger than
      ``max_age_days``; a stale or missing cache loads as an empty feed.
      It never deletes.
    * :meth:`validate_cache` deletes the cache when it is stale or cannot be
      retrieved.

    Args:
        store: Backend owning the cache slot.
        clock: Time source; defaults to :class:`~feedcache.clock.SystemClock`.
        max_age_days: Calendar days a saved feed stays valid.

    Example::

        loader = LocalFeedLoader(InMemoryFeedStore())
        loader.save(images, lambda error: ...)
        loader.load(lambda result: ...)
    """

    def __init__(
        self,
        store: FeedStore,
        clock: Optional[Clock] = None,
        max_age_days: int = MAX_CACHE_AGE_DAYS,
    ) -> None:
        self._store = store
        self._clock = clock or SystemClock()
        self._max_age_days = max_age_days
        self._closed = False

    def __enter__(self) -> LocalFeedLoader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Drop the completions of every operation still waiting on the store."""
        self._closed = True

    # ------------------------------------------------------------------ #
    # Save
    # ------------------------------------------------------------------ #

    def save(self, feed: Iterable[FeedImage], completion: SaveCompletion) -> None:
        """Replace the cached feed with *feed*.

        Args:
            feed: Images to cache, in feed order.
            completion: Receives ``None`` on success, otherwise the deletion
                or insertion error from the store.
        """
        feed = list(feed)

        def on_deletion(loader: LocalFeedLoader, error: Optional[Exception]) -> None:
            if error is not None:
                logger.debug("Cache deletion failed, not inserting: %s", error)
                completion(error)
                return
            loader._cache(feed, completion)

        self._store.delete_cached_feed(self._guard(on_deletion))

    def _cache(self, feed: Sequence[FeedImage], completion: SaveCompletion) -> None:
        timestamp = self._clock.now()

        def on_insertion(loader: LocalFeedLoader, error: Optional[Exception]) -> None:
            if error is None:
                logger.debug("Cached %d image(s) at %s", len(feed), timestamp.isoformat())
            completion(error)

        self._store.insert(_to_local(feed), timestamp, self._guard(on_insertion))

    # ------------------------------------------------------------------ #
    # Load
    # ------------------------------------------------------------------ #

    def load(self, completion: LoadCompletion) -> None:
        """Deliver the cached feed if it is still valid, else an empty feed.

        Retrieval errors are delivered unchanged as a
        :class:`~feedcache.result.Failure`.
        """

        def on_retrieval(loader: LocalFeedLoader, result: RetrievalResult) -> None:
            if isinstance(result, Failure):
                completion(result)
                return
            cached = result.value
            if cached is None:
                logger.debug("Cache miss: no cached feed")
                completion(Success([]))
            elif loader._is_fresh(cached.timestamp):
                logger.debug("Cache hit: %d image(s)", len(cached.feed))
                completion(Success(_to_models(cached.feed)))
            else:
                logger.debug("Cache stale: saved at %s", cached.timestamp.isoformat())
                completion(Success([]))

        self._store.retrieve(self._guard(on_retrieval))

    # ------------------------------------------------------------------ #
    # Validate
    # ------------------------------------------------------------------ #

    def validate_cache(self, completion: Optional[ValidationCompletion] = None) -> None:
        """Delete the cache if it is stale or cannot be retrieved.

        A valid or empty cache is left untouched.  The outcome of the
        deletion is logged and otherwise ignored.

        Args:
            completion: Optional callable invoked with no arguments once
                validation (including any deletion) has finished.
        """

        def finish() -> None:
            if completion is not None:
                completion()

        def on_deletion(loader: LocalFeedLoader, error: Optional[Exception]) -> None:
            if error is not None:
                logger.warning("Could not delete invalid feed cache: %s", error)
            finish()

        def on_retrieval(loader: LocalFeedLoader, result: RetrievalResult) -> None:
            if isinstance(result, Failure):
                logger.warning("Feed cache unreadable, deleting it: %s", result.error)
            elif result.value is not None and not loader._is_fresh(result.value.timestamp):
                logger.debug("Feed cache stale, deleting it")
            else:
                finish()
                return
            loader._store.delete_cached_feed(loader._guard(on_deletion))

        self._store.retrieve(self._guard(on_retrieval))

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _is_fresh(self, timestamp) -> bool:
        return is_valid(timestamp, self._clock.now(), self._max_age_days)

    def _guard(self, continuation):
        """Wrap *continuation* so it only runs while this loader is alive and open.

        The returned callable holds the loader weakly and passes it to
        *continuation* as the first argument.
        """
        ref = weakref.ref(self)

        def callback(*args):
            loader = ref()
            if loader is None or loader._closed:
                logger.debug("Local loader released, dropping store completion")
                return
            continuation(loader, *args)

        return callback


def _to_local(feed: Iterable[FeedImage]) -> list[LocalFeedImage]:
    return [
        LocalFeedImage(
            id=image.id,
            description=image.description,
            location=image.location,
            url=image.url,
        )
        for image in feed
    ]


def _to_models(feed: Iterable[LocalFeedImage]) -> list[FeedImage]:
    return [
        FeedImage(
            id=image.id,
            description=image.description,
            location=image.location,
            url=image.url,
        )
        for image in feed
    ]
