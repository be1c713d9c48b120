"""
Debounce Timers
===============
Coalesces bursts of input events into one call.

Each logical key owns at most one pending single-shot QTimer. Scheduling the
same key again stops the pending timer and starts over with the new callback,
so only the last call of a burst runs.
"""
from __future__ import annotations

import logging
from typing import Callable, Hashable, Optional

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class Debouncer(QObject):
    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._timers: dict[Hashable, QTimer] = {}
        self._callbacks: dict[Hashable, Callable[[], None]] = {}

    def schedule(self, key: Hashable, delay_ms: int, fn: Callable[[], None]) -> None:
        """Run `fn` after `delay_ms`, cancelling anything pending under `key`."""
        timer = self._timers.get(key)
        if timer is None:
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.timeout.connect(lambda k=key: self._fire(k))
            self._timers[key] = timer
        else:
            timer.stop()
        self._callbacks[key] = fn
        timer.start(delay_ms)

    def cancel(self, key: Hashable) -> bool:
        """Drop the pending call for `key`. Returns True if one was pending."""
        timer = self._timers.get(key)
        if timer is not None:
            timer.stop()
        return self._callbacks.pop(key, None) is not None

    def is_pending(self, key: Hashable) -> bool:
        return key in self._callbacks

    def flush(self, key: Optional[Hashable] = None) -> None:
        """Run pending calls now (all of them, or only `key`)."""
        keys = [key] if key is not None else list(self._callbacks)
        for k in keys:
            timer = self._timers.get(k)
            if timer is not None:
                timer.stop()
            self._fire(k)

    def _fire(self, key: Hashable) -> None:
        fn = self._callbacks.pop(key, None)
        if fn is None:
            return
        logger.debug(f"Debounced call '{key}' fired")
        fn()
