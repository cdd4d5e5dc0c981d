"""Injectable time source.

The cache policy never reads the wall clock itself.  Loaders receive a
:class:`Clock` at construction and call :meth:`Clock.now` exactly once per
operation that needs the current time, which lets tests move time forward
deterministically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware :class:`datetime`."""


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class CallableClock(Clock):
    """Adapts a zero-argument callable (e.g. ``lambda: fixed``) to :class:`Clock`."""

    def __init__(self, func: Callable[[], datetime]) -> None:
        self._func = func

    def now(self) -> datetime:
        return self._func()
