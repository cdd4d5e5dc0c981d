"""The contract shared by the remote and local feed loaders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from feedcache.models import FeedImage
from feedcache.result import Result

LoadResult = Result[list[FeedImage]]
LoadCompletion = Callable[[LoadResult], None]


class FeedLoader(ABC):
    """Loads the feed and reports the outcome through a completion.

    Implementations never raise for operational failures and never block
    the caller waiting on I/O.  The completion is called at most once, with
    a :class:`~feedcache.result.Success` holding the images in feed order
    or a :class:`~feedcache.result.Failure` holding the error.
    """

    @abstractmethod
    def load(self, completion: LoadCompletion) -> None:
        """Start loading the feed and call *completion* with the result."""
