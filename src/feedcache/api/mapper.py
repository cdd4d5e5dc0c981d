"""Maps a raw feed response into :class:`~feedcache.models.FeedImage` values.

The endpoint returns::

    {"items": [{"id": "<uuid>", "description": "...", "location": "...",
                "image": "<url>"}, ...]}

``description`` and ``location`` are optional.  Anything other than a 200
with a body matching this envelope is reported as a single
:class:`~feedcache.exceptions.InvalidDataError`.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ValidationError

from feedcache.exceptions import InvalidDataError
from feedcache.models import FeedImage

OK_200 = 200


class _RemoteFeedItem(BaseModel):
    id: UUID
    description: Optional[str] = None
    location: Optional[str] = None
    image: AnyUrl

    def to_model(self) -> FeedImage:
        return FeedImage(
            id=self.id,
            description=self.description,
            location=self.location,
            url=self.image,
        )


class _Root(BaseModel):
    items: list[_RemoteFeedItem]


def map_feed(data: bytes, status_code: int) -> list[FeedImage]:
    """Validate and decode a feed response.

    Args:
        data: Raw response body.
        status_code: HTTP status of the response.

    Returns:
        The feed images in response order.

    Raises:
        InvalidDataError: If the status is not 200 or the body does not
            decode against the feed envelope.
    """
    if status_code != OK_200:
        raise InvalidDataError(f"Unexpected status code {status_code}")
    try:
        root = _Root.model_validate_json(data)
    except ValidationError as exc:
        raise InvalidDataError(f"Malformed feed payload: {exc.error_count()} error(s)") from exc
    return [item.to_model() for item in root.items]
