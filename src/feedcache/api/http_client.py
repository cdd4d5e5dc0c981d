"""HTTP transport contract and its :mod:`httpx` implementation.

:class:`RemoteFeedLoader` only depends on :class:`HTTPClient`, a single
``get`` operation that reports either the raw response bytes and status code
or the transport error.  :class:`HttpxHTTPClient` implements it on top of
:class:`httpx.Client`, running each request on a small thread pool so the
caller is never blocked.

Status codes are not interpreted here: a 404 is a successful transport
round-trip and is delivered as ``Success(HTTPResponse(..., status_code=404))``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from feedcache.result import Failure, Result, Success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPResponse:
    """Raw body bytes and status code of a completed request."""

    data: bytes
    status_code: int


GetCompletion = Callable[[Result[HTTPResponse]], None]

# InvalidURL, StreamError and CookieConflict do not derive from HTTPError.
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, httpx.CookieConflict)


class HTTPClient(ABC):
    """Minimal HTTP transport used by :class:`~feedcache.api.RemoteFeedLoader`."""

    @abstractmethod
    def get(self, url: str, completion: GetCompletion) -> None:
        """Issue a GET for *url* and call *completion* exactly once.

        Args:
            url: Absolute URL to fetch.
            completion: Receives ``Success(HTTPResponse)`` when a response
                arrived (whatever its status) or ``Failure(error)`` when the
                transport failed.
        """


def _log_unhandled(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("GET completion raised", exc_info=exc)


class HttpxHTTPClient(HTTPClient):
    """Non-blocking :class:`HTTPClient` backed by :class:`httpx.Client`.

    Requests run on a :class:`~concurrent.futures.ThreadPoolExecutor` and the
    completion is called on the worker thread.  Any :class:`httpx.HTTPError`
    (connect errors, timeouts, protocol errors) and any malformed URL
    become a :class:`~feedcache.result.Failure`.

    The underlying client is opened lazily on the first :meth:`get` and
    released by :meth:`close`; using the instance as a context manager does
    both.

    Args:
        timeout: Request timeout in seconds.
        verify_ssl: Verify SSL certificates.
        transport: Optional custom :class:`httpx.BaseTransport`, e.g.
            :class:`httpx.MockTransport` in tests.
        max_workers: Size of the request thread pool.

    Example::

        with HttpxHTTPClient(timeout=5) as client:
            client.get("https://api.example.com/feed", on_response)
    """

    def __init__(
        self,
        timeout: float = 10.0,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
        max_workers: int = 4,
    ) -> None:
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._transport = transport
        self._max_workers = max_workers
        self._client: Optional[httpx.Client] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def __enter__(self) -> HttpxHTTPClient:
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def open(self) -> None:
        """Create the underlying client and worker pool if not already open."""
        if self._client is not None:
            return
        self._client = httpx.Client(
            timeout=self._timeout,
            verify=self._verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="feedcache-http"
        )

    def close(self) -> None:
        """Wait for in-flight requests, then release the client."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._client is not None:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # HTTPClient
    # ------------------------------------------------------------------ #

    def get(self, url: str, completion: GetCompletion) -> None:
        self.open()
        assert self._executor is not None
        future = self._executor.submit(self._perform, str(url), completion)
        future.add_done_callback(_log_unhandled)

    def _perform(self, url: str, completion: GetCompletion) -> None:
        assert self._client is not None, "Client closed while a request was pending"
        try:
            response = self._client.get(url)
        except _TRANSPORT_ERRORS as exc:
            logger.debug("GET %s failed: %s", url, exc)
            completion(Failure(exc))
            return
        logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
        completion(Success(HTTPResponse(data=response.content, status_code=response.status_code)))
