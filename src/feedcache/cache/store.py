"""The contract between :class:`~feedcache.cache.LocalFeedLoader` and a cache backend.

A store owns exactly one cache slot.  All three operations are
asynchronous: they return immediately and report through a one-shot
completion, possibly on another thread.

Implementations must run side effects (:meth:`FeedStore.delete_cached_feed`
and :meth:`FeedStore.insert`) one at a time, in the order they were issued,
so that concurrent callers never corrupt the slot.  Retrieval may overlap
with them.  Backends in :mod:`feedcache.stores` are independent
implementations of this class, not subclasses of one another.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional, Sequence

from feedcache.models import CachedFeed, LocalFeedImage
from feedcache.result import Result

DeletionCompletion = Callable[[Optional[Exception]], None]
InsertionCompletion = Callable[[Optional[Exception]], None]
RetrievalResult = Result[Optional[CachedFeed]]
RetrievalCompletion = Callable[[RetrievalResult], None]


class FeedStore(ABC):
    """Single-slot persistent storage for the cached feed."""

    @abstractmethod
    def delete_cached_feed(self, completion: DeletionCompletion) -> None:
        """Remove the cached feed, if any.

        *completion* receives ``None`` on success, including when there was
        nothing to delete, or the error that prevented deletion.
        """

    @abstractmethod
    def insert(
        self,
        feed: Sequence[LocalFeedImage],
        timestamp: datetime,
        completion: InsertionCompletion,
    ) -> None:
        """Replace the cached feed with *feed* saved at *timestamp*.

        *completion* receives ``None`` on success or the insertion error.
        """

    @abstractmethod
    def retrieve(self, completion: RetrievalCompletion) -> None:
        """Read the cached feed without modifying it.

        *completion* receives ``Success(CachedFeed)`` when a cache is present,
        ``Success(None)`` when it is empty, or ``Failure(error)``.
        """
