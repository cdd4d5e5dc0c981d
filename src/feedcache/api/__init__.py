"""Remote feed loading over HTTP.

Classes:
    :class:`RemoteFeedLoader` -- :class:`~feedcache.loader.FeedLoader` backed
    by an :class:`HTTPClient`.
    :class:`HTTPClient` -- the transport contract.
    :class:`HttpxHTTPClient` -- non-blocking implementation on :mod:`httpx`.

Example::

    from feedcache.api import HttpxHTTPClient, RemoteFeedLoader

    with HttpxHTTPClient() as client:
        loader = RemoteFeedLoader("https://api.example.com/feed", client)
        loader.load(print)
"""

from feedcache.api.http_client import HTTPClient, HTTPResponse, HttpxHTTPClient
from feedcache.api.remote_loader import RemoteFeedLoader

__all__ = ["HTTPClient", "HTTPResponse", "HttpxHTTPClient", "RemoteFeedLoader"]
