"""Exception hierarchy for feedcache.

All exceptions inherit from :class:`FeedCacheError`.  Loaders never raise
these for operational outcomes; they are delivered inside a
:class:`~feedcache.result.Failure` through the operation's completion.
Only programming and configuration errors (e.g. :class:`ConfigError`) are
raised synchronously.

Subclass hierarchy::

    FeedCacheError
    +-- ConnectivityError   (transport failure reaching the endpoint)
    +-- InvalidDataError    (non-200 status or undecodable payload)
    +-- StoreError          (cache store I/O or decode failure)
    +-- ConfigError         (invalid configuration file or values)
"""

from __future__ import annotations


class FeedCacheError(Exception):
    """Base exception for all feedcache errors.

    Every subclass provides a class-level ``default_message`` used when the
    exception is created without an explicit message, so that
    ``ConnectivityError()`` is a meaningful value on its own.

    Args:
        message: Human-readable error description.
    """

    default_message: str = "feedcache error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ConnectivityError(FeedCacheError):
    """Raised when the remote endpoint cannot be reached (DNS, refused, timeout)."""

    default_message = "Could not reach the feed endpoint"


class InvalidDataError(FeedCacheError):
    """Raised when the feed response is not a 200 with a valid ``items`` envelope.

    Status and decoding failures are deliberately not distinguished.
    """

    default_message = "Invalid feed data"


class StoreError(FeedCacheError):
    """Raised by concrete feed stores when reading, writing or deleting the cache fails.

    The underlying library exception is chained as ``__cause__``.
    """

    default_message = "Feed store operation failed"


class ConfigError(FeedCacheError):
    """Raised for configuration problems (invalid JSON, unknown backend, missing URL)."""

    default_message = "Invalid feedcache configuration"
