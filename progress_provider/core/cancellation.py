# progress_provider/core/cancellation.py
"""Cooperative cancellation signal exposed by progress handles."""

import threading
from typing import Callable, List, Optional

from progress_provider.foundations.types import OperationCancelledError
from progress_provider.infrastructure.logging import get_logger

logger = get_logger(__name__)


class CancellationSource:
    """
    Signal that lets the owner of a progress handle observe cancellation.

    The progress engine never cancels anything itself. Code holding the
    source (typically the UI) calls ``cancel``; the work polls
    ``is_cancellation_requested``, waits on the signal or registers a
    callback.
    """

    def __init__(self):
        self._event = threading.Event()
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.RLock()
        self._closed = False

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def cancel(self) -> None:
        """Request cancellation and run the registered callbacks once."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        logger.debug("Cancellation requested", extra={'context': {'callbacks': len(callbacks)}})

        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Cancellation callback error: {e}")

    def register(self, callback: Callable[[], None]) -> None:
        """
        Register a callback to run when cancellation is requested.

        Runs immediately when cancellation was already requested. Closed
        sources never call newly registered callbacks.
        """
        with self._lock:
            if self._closed:
                return
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancellation is requested or the timeout expires."""
        return self._event.wait(timeout)

    def raise_if_cancellation_requested(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

    def close(self) -> None:
        """Release registered callbacks. Closing twice has no effect."""
        with self._lock:
            self._closed = True
            self._callbacks.clear()
