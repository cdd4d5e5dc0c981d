"""Single-worker executor shared by the file-backed stores."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from feedcache.exceptions import StoreError

logger = logging.getLogger(__name__)


def _log_unhandled(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Store operation raised", exc_info=exc)


def store_closed_error() -> StoreError:
    """The error delivered for operations issued after a store was closed."""
    return StoreError("Store is closed")


class SerialQueue:
    """Runs submitted callables one at a time, in submission order, off the caller's thread."""

    def __init__(self, name: str) -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._lock = threading.Lock()
        self._closed = False

    def submit(self, fn: Callable[..., Any], *args: Any) -> Optional[Future]:
        """Queue ``fn(*args)``.

        Returns:
            The scheduled future, or ``None`` if the queue has been shut
            down and *fn* will never run.
        """
        with self._lock:
            if self._closed:
                return None
            future = self._executor.submit(fn, *args)
        future.add_done_callback(_log_unhandled)
        return future

    def shutdown(self) -> None:
        """Refuse new work, wait for queued operations to finish, then stop the worker."""
        with self._lock:
            self._closed = True
        # Not under the lock: queued completions may call submit() from the worker.
        self._executor.shutdown(wait=True)
