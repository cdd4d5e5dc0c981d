"""Builds loaders and stores from a :class:`~feedcache.models.FeedCacheConfig`.

This is the only module that knows about every concrete backend.  The
loaders themselves depend on the :class:`~feedcache.cache.store.FeedStore`
and :class:`~feedcache.api.HTTPClient` contracts only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from feedcache.api import HTTPClient, HttpxHTTPClient, RemoteFeedLoader
from feedcache.cache import FeedStore, LocalFeedLoader
from feedcache.clock import Clock
from feedcache.config import get_cache_dir
from feedcache.exceptions import ConfigError
from feedcache.models import FeedCacheConfig, RemoteConfig, StoreConfig
from feedcache.stores import DiskCacheFeedStore, InMemoryFeedStore, JsonFileFeedStore

logger = logging.getLogger(__name__)

_JSON_FILENAME = "feed.json"


def build_store(config: StoreConfig) -> FeedStore:
    """Create the store backend named by ``config.backend``.

    When ``config.path`` is unset, file-backed stores live in the XDG cache
    directory (see :func:`~feedcache.config.get_cache_dir`).
    """
    if config.backend == "memory":
        return InMemoryFeedStore()
    if config.backend == "json":
        path = Path(config.path) if config.path else get_cache_dir() / _JSON_FILENAME
        logger.debug("Using JSON feed store at %s", path)
        return JsonFileFeedStore(path)
    if config.backend == "diskcache":
        directory = Path(config.path) if config.path else get_cache_dir()
        logger.debug("Using diskcache feed store in %s", directory)
        return DiskCacheFeedStore(directory)
    raise ConfigError(f"Unknown store backend: {config.backend}")


def build_http_client(config: RemoteConfig) -> HttpxHTTPClient:
    """Create an :class:`~feedcache.api.HttpxHTTPClient` from the remote settings."""
    return HttpxHTTPClient(timeout=config.timeout, verify_ssl=config.verify_ssl)


def build_remote_feed_loader(
    config: FeedCacheConfig,
    client: Optional[HTTPClient] = None,
) -> RemoteFeedLoader:
    """Create a :class:`~feedcache.api.RemoteFeedLoader` for ``config.remote.url``.

    Raises:
        ConfigError: If no feed URL is configured.
    """
    if not config.remote.url:
        raise ConfigError("No feed URL configured (set remote.url or FEEDCACHE_URL)")
    return RemoteFeedLoader(config.remote.url, client or build_http_client(config.remote))


def build_local_feed_loader(
    config: FeedCacheConfig,
    clock: Optional[Clock] = None,
    store: Optional[FeedStore] = None,
) -> LocalFeedLoader:
    """Create a :class:`~feedcache.cache.LocalFeedLoader` over the configured store."""
    return LocalFeedLoader(
        store or build_store(config.store),
        clock=clock,
        max_age_days=config.store.max_age_days,
    )
