"""Completion values delivered by loaders, stores and HTTP clients.

Every asynchronous operation in feedcache reports its outcome through a
one-shot completion callable that receives either a :class:`Success` or a
:class:`Failure`.  Callers branch on the type::

    def on_load(result: Result[list[FeedImage]]) -> None:
        if isinstance(result, Success):
            show(result.value)
        else:
            log(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A failed outcome carrying the ``error`` that caused it."""

    error: Exception

    def unwrap(self):
        """Re-raise the carried error."""
        raise self.error


Result = Union[Success[T], Failure]
