"""Cache staleness policy.

A cached feed is valid for :data:`MAX_CACHE_AGE_DAYS` calendar days after it
was saved.  The age is added to the timestamp with aware-datetime
arithmetic, which in Python is wall-clock arithmetic in the timestamp's own
timezone: a feed saved at 09:00 local time expires at 09:00 local time seven
days later even across a DST change.  For UTC timestamps, and for any
fixed-offset timestamp, this is the same as adding 604800 seconds.

The file-backed stores persist timestamps as ISO 8601 strings, which keep
the UTC offset but not the ``zoneinfo`` zone.  A feed saved with a
``ZoneInfo`` timestamp is read back with a fixed offset, so the age of a
persisted cache is always measured in 24-hour days from the saved instant.
"""

from __future__ import annotations

from datetime import datetime, timedelta

MAX_CACHE_AGE_DAYS = 7


def is_valid(
    timestamp: datetime,
    now: datetime,
    max_age_days: int = MAX_CACHE_AGE_DAYS,
) -> bool:
    """Return whether a cache saved at *timestamp* is still valid at *now*.

    The boundary is exclusive: a cache exactly *max_age_days* old is stale.
    A timestamp so close to ``datetime.max`` that the expiry cannot be
    represented is treated as stale.
    """
    try:
        max_age = timestamp + timedelta(days=max_age_days)
    except OverflowError:
        return False
    return now < max_age
