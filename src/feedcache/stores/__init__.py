"""Concrete :class:`~feedcache.cache.store.FeedStore` backends.

Classes:
    :class:`InMemoryFeedStore` -- process-local slot, completes synchronously.
    :class:`JsonFileFeedStore` -- one JSON file written atomically.
    :class:`DiskCacheFeedStore` -- one key in a :mod:`diskcache` directory.

The file-backed stores run every operation on a single worker thread, so
side effects are applied one at a time in the order they were issued.  Call
``close()`` (or use them as context managers) to drain pending operations
and release resources.
"""

from feedcache.stores.disk import DiskCacheFeedStore
from feedcache.stores.json_file import JsonFileFeedStore
from feedcache.stores.memory import InMemoryFeedStore

__all__ = ["DiskCacheFeedStore", "InMemoryFeedStore", "JsonFileFeedStore"]
