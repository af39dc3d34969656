"""Frame tick sources driving per-frame animation updates.

A tick source hands out ``TickHandle`` registrations: one callback invoked
once per display frame until the handle is cancelled. Cancelling is
idempotent and guarantees no further calls of that callback. Handles are
context managers so a registration scoped to a block is always released.

Two sources are provided:

 - ``QtFrameTickSource``: one precise ``QTimer`` per registration, interval
   derived from the primary screen refresh rate. Requires a running
   ``QApplication``; PyQt6 is imported lazily so this module stays headless.
 - ``ManualTickSource``: ticks only when ``tick()`` is called. Used by tests
   and by callers that already own a frame loop.

Usage::

    source = default_tick_source()
    handle = source.register(on_frame)
    ...
    handle.cancel()
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from typebounce.config import settings

__all__ = [
    "TickCallback",
    "TickHandle",
    "ManualTickSource",
    "QtFrameTickSource",
    "default_tick_source",
]

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickHandle:
    """A single live tick registration."""

    def __init__(self, callback: TickCallback, release: Callable[[], None]) -> None:
        self.callback = callback
        self._release: Optional[Callable[[], None]] = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def cancel(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self) -> "TickHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()


class ManualTickSource:
    """Headless tick source; frames advance only through ``tick()``."""

    def __init__(self, interval: float = 1.0 / settings.FALLBACK_REFRESH_RATE_HZ) -> None:
        if not interval > 0:
            raise ValueError("interval must be > 0")
        self._interval = float(interval)
        self._handles: List[TickHandle] = []

    def interval(self) -> float:
        return self._interval

    def register(self, callback: TickCallback) -> TickHandle:
        handle: TickHandle

        def release() -> None:
            self._handles.remove(handle)

        handle = TickHandle(callback, release)
        self._handles.append(handle)
        return handle

    @property
    def active_count(self) -> int:
        return len(self._handles)

    def tick(self, count: int = 1) -> int:
        """Fire ``count`` frames; return the number of callbacks invoked."""
        fired = 0
        for _ in range(count):
            for handle in list(self._handles):
                # a callback earlier in this frame may have cancelled this one
                if handle.active:
                    handle.callback()
                    fired += 1
        return fired


class QtFrameTickSource:
    """QTimer backed tick source synchronised to the screen refresh rate."""

    def __init__(self, refresh_rate_hz: Optional[float] = None) -> None:
        self._refresh_rate_hz = refresh_rate_hz
        self._owner = None

    def _timer_parent(self):
        # parented timers are owned by Qt, so deleteLater is safe from inside timeout
        if self._owner is None:
            from PyQt6.QtCore import QObject

            self._owner = QObject()
        return self._owner

    def refresh_rate_hz(self) -> float:
        if self._refresh_rate_hz is not None and self._refresh_rate_hz > 0:
            return float(self._refresh_rate_hz)
        from PyQt6.QtGui import QGuiApplication

        screen = QGuiApplication.primaryScreen()
        rate = screen.refreshRate() if screen is not None else 0.0
        return rate if rate > 0 else settings.FALLBACK_REFRESH_RATE_HZ

    def interval(self) -> float:
        return 1.0 / self.refresh_rate_hz()

    def register(self, callback: TickCallback) -> TickHandle:
        from PyQt6.QtCore import Qt, QTimer

        timer = QTimer(self._timer_parent())
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.setInterval(max(1, round(self.interval() * 1000)))
        timer.timeout.connect(callback)  # type: ignore[attr-defined]

        def release() -> None:
            timer.stop()
            try:
                timer.timeout.disconnect(callback)  # type: ignore[attr-defined]
            except TypeError:  # pragma: no cover - already disconnected
                pass
            timer.deleteLater()

        timer.start()
        logger.debug("Frame timer started (interval=%sms)", timer.interval())
        return TickHandle(callback, release)


_default_source: Optional[QtFrameTickSource] = None


def default_tick_source() -> QtFrameTickSource:
    """Return the process-wide Qt tick source, creating it on first use."""
    global _default_source
    if _default_source is None:
        _default_source = QtFrameTickSource()
    return _default_source
