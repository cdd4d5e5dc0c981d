"""Local feed caching: store contract, staleness policy and the cache-backed loader.

:class:`LocalFeedLoader` keeps a single :class:`~feedcache.models.CachedFeed`
in a :class:`FeedStore` and serves it for seven calendar days.  Reads never
delete; purging stale or unreadable caches is the job of
:meth:`LocalFeedLoader.validate_cache`.

Example::

    from feedcache.cache import LocalFeedLoader
    from feedcache.stores import JsonFileFeedStore

    loader = LocalFeedLoader(JsonFileFeedStore("/tmp/feed.json"))
    loader.save(images, on_saved)
    loader.load(on_loaded)
    loader.validate_cache()
"""

from feedcache.cache.local_loader import LocalFeedLoader
from feedcache.cache.policy import MAX_CACHE_AGE_DAYS, is_valid
from feedcache.cache.store import FeedStore

__all__ = ["FeedStore", "LocalFeedLoader", "MAX_CACHE_AGE_DAYS", "is_valid"]
