"""Cooperative cancellation signals for selection requests."""

from __future__ import annotations

import logging
import threading
from typing import Callable

LOGGER = logging.getLogger(__name__)


class CancellationToken:
    """Read-only view of a cancellation signal."""

    __slots__ = ("_event", "_callbacks", "_lock")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._callbacks: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def on_cancelled(self, callback: Callable[[], None]) -> None:
        """Register ``callback``; it runs immediately if already cancelled."""

        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def _cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception:  # pragma: no cover - callbacks are host code
                LOGGER.exception("Cancellation callback failed")


class CancellationTokenSource:
    """Owner side of a :class:`CancellationToken`."""

    __slots__ = ("_token",)

    def __init__(self) -> None:
        self._token = CancellationToken()

    @property
    def token(self) -> CancellationToken:
        return self._token

    def cancel(self) -> None:
        self._token._cancel()


NONE_TOKEN = CancellationToken()


__all__ = ["CancellationToken", "CancellationTokenSource", "NONE_TOKEN"]
