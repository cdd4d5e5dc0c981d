"""Feed loader that fetches the feed from a remote endpoint."""

from __future__ import annotations

import logging
import weakref

from feedcache.api.http_client import HTTPClient, HTTPResponse
from feedcache.api.mapper import map_feed
from feedcache.exceptions import ConnectivityError, InvalidDataError
from feedcache.loader import FeedLoader, LoadCompletion, LoadResult
from feedcache.result import Failure, Result, Success

logger = logging.getLogger(__name__)


class RemoteFeedLoader(FeedLoader):
    """Loads the feed from *url* through an :class:`HTTPClient`.

    Transport failures are delivered as
    :class:`~feedcache.exceptions.ConnectivityError`; responses that are not a
    200 with a valid feed envelope as
    :class:`~feedcache.exceptions.InvalidDataError`.

    If the loader is garbage collected or closed before the client
    responds, the completion is not called.

    Args:
        url: The feed endpoint.
        client: Transport used to issue the GET.
    """

    def __init__(self, url: str, client: HTTPClient) -> None:
        self._url = url
        self._client = client
        self._closed = False

    def __enter__(self) -> RemoteFeedLoader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def url(self) -> str:
        return self._url

    def close(self) -> None:
        """Suppress the completions of any pending loads."""
        self._closed = True

    def load(self, completion: LoadCompletion) -> None:
        url = self._url
        ref = weakref.ref(self)

        def on_response(result: Result[HTTPResponse]) -> None:
            loader = ref()
            if loader is None or loader._closed:
                logger.debug("Remote loader released, dropping response for %s", url)
                return
            completion(_map(result))

        logger.debug("Loading feed from %s", url)
        self._client.get(url, on_response)


def _map(result: Result[HTTPResponse]) -> LoadResult:
    if isinstance(result, Failure):
        error = ConnectivityError()
        error.__cause__ = result.error
        return Failure(error)
    try:
        return Success(map_feed(result.value.data, result.value.status_code))
    except InvalidDataError as exc:
        logger.debug("Rejected feed response: %s", exc)
        return Failure(exc)
