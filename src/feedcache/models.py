"""Canonical Pydantic models shared across all feedcache modules.

The models fall into two groups:

**Feed models** -- the values that flow through loaders and stores:
    :class:`FeedImage` (domain), :class:`LocalFeedImage` (persisted shape)
    and :class:`CachedFeed` (the single cached snapshot).

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`RemoteConfig`, :class:`StoreConfig` and
:class:`FeedCacheConfig`.

Feed models are frozen, so instances are immutable, hashable and compare
structurally over all of their fields.  :class:`FeedImage` and
:class:`LocalFeedImage` have the same fields on purpose: the cache format
can change without touching the domain model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ConfigDict, Field


# --- Feed models ---


class FeedImage(BaseModel):
    """A single image in the feed, as seen by callers of a loader.

    Example::

        FeedImage(
            id=uuid4(),
            description="Lake at dawn",
            location="Lugano",
            url="https://cdn.example.com/img/1.jpg",
        )
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    description: Optional[str] = None
    location: Optional[str] = None
    url: AnyUrl


class LocalFeedImage(BaseModel):
    """Persisted representation of a :class:`FeedImage`."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    description: Optional[str] = None
    location: Optional[str] = None
    url: AnyUrl


class CachedFeed(BaseModel):
    """The one cached snapshot: an ordered feed plus the time it was saved.

    ``timestamp`` is always the value returned by the saving loader's
    :class:`~feedcache.clock.Clock` at insertion time.
    """

    model_config = ConfigDict(frozen=True)

    feed: tuple[LocalFeedImage, ...] = ()
    timestamp: datetime


# --- Configuration models ---


class RemoteConfig(BaseModel):
    """Where and how to fetch the remote feed."""

    url: Optional[str] = Field(default=None, description="Feed endpoint URL")
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class StoreConfig(BaseModel):
    """Which cache backend to use and how long a snapshot stays valid."""

    backend: Literal["json", "diskcache", "memory"] = Field(
        default="json", description="Store backend: json, diskcache, memory"
    )
    path: Optional[str] = Field(
        default=None,
        description="File (json) or directory (diskcache) for the cache; "
        "defaults to the XDG cache directory",
    )
    max_age_days: int = Field(
        default=7, ge=1, description="Calendar days a cached feed stays valid"
    )


class FeedCacheConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/feedcache/config.json``.

    Loaded and saved by :func:`~feedcache.config.load_config` and
    :func:`~feedcache.config.save_config`.  See
    :func:`~feedcache.config.resolve_config` for the precedence chain.
    """

    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
