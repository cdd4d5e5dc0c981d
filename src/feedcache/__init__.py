"""feedcache -- load an image feed from a remote endpoint or a local cache.

The package is split into two halves that share the :class:`~feedcache.loader.FeedLoader`
contract:

* **Remote** (:mod:`feedcache.api`) -- fetches the feed over HTTP and maps the
  JSON envelope into :class:`~feedcache.models.FeedImage` values.
* **Local** (:mod:`feedcache.cache`) -- saves, loads and validates a single
  cached snapshot through a pluggable :class:`~feedcache.cache.store.FeedStore`,
  expiring it after seven calendar days.

Concrete store backends live in :mod:`feedcache.stores`, and
:mod:`feedcache.composition` wires everything together from a
:class:`~feedcache.models.FeedCacheConfig`.

Typical usage::

    from feedcache.composition import build_local_feed_loader
    from feedcache.config import resolve_config

    loader = build_local_feed_loader(resolve_config())
    loader.load(lambda result: print(result))

Modules:
    models: Pydantic models for the domain and the configuration.
    result: ``Success`` / ``Failure`` completion values.
    clock: Injectable time source.
    config: XDG-aware configuration loading and precedence resolution.
    exceptions: Exception hierarchy.
"""

__version__ = "0.1.0"
