"""Shared fixtures for feedcache tests.

Provides spies for the two collaborator contracts (:class:`FeedStoreSpy`,
:class:`HTTPClientSpy`) that record what they were asked to do and hold on
to completions so tests decide when, and with what, each call completes.
Also provides feed factories, a controllable clock and config isolation.
These fixtures are discovered by pytest automatically.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence
from uuid import uuid4

import pytest

from feedcache.api.http_client import GetCompletion, HTTPClient, HTTPResponse
from feedcache.cache.store import (
    DeletionCompletion,
    FeedStore,
    InsertionCompletion,
    RetrievalCompletion,
)
from feedcache.clock import Clock
from feedcache.models import CachedFeed, FeedImage, LocalFeedImage
from feedcache.result import Failure, Success

ANY_URL = "http://any-url.com"


# ---------------------------------------------------------------------------
# Collaborator spies
# ---------------------------------------------------------------------------


class FeedStoreSpy(FeedStore):
    """Records received messages in order and completes them on demand."""

    DELETE = ("delete_cached_feed",)
    RETRIEVE = ("retrieve",)

    def __init__(self) -> None:
        self.received_messages: list[tuple] = []
        self._deletion_completions: list[DeletionCompletion] = []
        self._insertion_completions: list[InsertionCompletion] = []
        self._retrieval_completions: list[RetrievalCompletion] = []

    @staticmethod
    def insert_message(feed: Sequence[LocalFeedImage], timestamp: datetime) -> tuple:
        return ("insert", tuple(feed), timestamp)

    # Deletion

    def delete_cached_feed(self, completion: DeletionCompletion) -> None:
        self.received_messages.append(self.DELETE)
        self._deletion_completions.append(completion)

    def complete_deletion(self, error: Exception, index: int = 0) -> None:
        self._deletion_completions[index](error)

    def complete_deletion_successfully(self, index: int = 0) -> None:
        self._deletion_completions[index](None)

    # Insertion

    def insert(
        self,
        feed: Sequence[LocalFeedImage],
        timestamp: datetime,
        completion: InsertionCompletion,
    ) -> None:
        self.received_messages.append(self.insert_message(feed, timestamp))
        self._insertion_completions.append(completion)

    def complete_insertion(self, error: Exception, index: int = 0) -> None:
        self._insertion_completions[index](error)

    def complete_insertion_successfully(self, index: int = 0) -> None:
        self._insertion_completions[index](None)

    # Retrieval

    def retrieve(self, completion: RetrievalCompletion) -> None:
        self.received_messages.append(self.RETRIEVE)
        self._retrieval_completions.append(completion)

    def complete_retrieval(self, error: Exception, index: int = 0) -> None:
        self._retrieval_completions[index](Failure(error))

    def complete_retrieval_with_empty_cache(self, index: int = 0) -> None:
        self._retrieval_completions[index](Success(None))

    def complete_retrieval_with(
        self,
        feed: Sequence[LocalFeedImage],
        timestamp: datetime,
        index: int = 0,
    ) -> None:
        cache = CachedFeed(feed=tuple(feed), timestamp=timestamp)
        self._retrieval_completions[index](Success(cache))


class HTTPClientSpy(HTTPClient):
    """Records requested URLs and completes requests on demand."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, GetCompletion]] = []

    @property
    def requested_urls(self) -> list[str]:
        return [url for url, _ in self.messages]

    def get(self, url: str, completion: GetCompletion) -> None:
        self.messages.append((url, completion))

    def complete_with_error(self, error: Exception, index: int = 0) -> None:
        self.messages[index][1](Failure(error))

    def complete_with(self, status_code: int, data: bytes, index: int = 0) -> None:
        self.messages[index][1](Success(HTTPResponse(data=data, status_code=status_code)))


class MutableClock(Clock):
    """Clock whose current time tests can move, counting :meth:`now` calls."""

    def __init__(self, current: datetime) -> None:
        self.current = current
        self.calls = 0

    def now(self) -> datetime:
        self.calls += 1
        return self.current


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> FeedStoreSpy:
    return FeedStoreSpy()


@pytest.fixture
def client() -> HTTPClientSpy:
    return HTTPClientSpy()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed, timezone-aware reference time."""
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now: datetime) -> MutableClock:
    return MutableClock(fixed_now)


@pytest.fixture
def any_error() -> Exception:
    return RuntimeError("any error")


@pytest.fixture
def unique_image() -> Callable[..., FeedImage]:
    """Factory fixture: returns a new image with a random id on every call."""

    def _make(
        description: Optional[str] = None,
        location: Optional[str] = None,
        url: str = ANY_URL,
    ) -> FeedImage:
        return FeedImage(id=uuid4(), description=description, location=location, url=url)

    return _make


@pytest.fixture
def unique_image_feed(
    unique_image: Callable[..., FeedImage],
) -> Callable[[], tuple[list[FeedImage], list[LocalFeedImage]]]:
    """Factory fixture: returns ``(models, local)`` for a new two-image feed."""

    def _make() -> tuple[list[FeedImage], list[LocalFeedImage]]:
        models = [unique_image(), unique_image(description="a description", location="a location")]
        local = [
            LocalFeedImage(
                id=image.id,
                description=image.description,
                location=image.location,
                url=image.url,
            )
            for image in models
        ]
        return models, local

    return _make


@pytest.fixture
def max_age() -> timedelta:
    """The cache max age expressed as a timedelta."""
    return timedelta(days=7)


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and cache directories to *tmp_path*.

    Forces XDG path resolution, points ``XDG_CONFIG_HOME`` and
    ``XDG_CACHE_HOME`` at subdirectories of *tmp_path* and clears all
    ``FEEDCACHE_*`` environment variables.
    """
    monkeypatch.setattr("feedcache.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for var in ["FEEDCACHE_URL", "FEEDCACHE_STORE"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path
