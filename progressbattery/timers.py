from __future__ import annotations

import math
from typing import Callable, Protocol

from PySide6.QtCore import QObject, QTimer

# QTimer takes a signed 32-bit millisecond interval.
_MAX_TIMER_MS = 2**31 - 1


class SchedulingError(RuntimeError):
    """A wake-up could not be armed."""


class TaskHandle(Protocol):
    def cancel(self) -> None: ...


class TaskScheduler(Protocol):
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TaskHandle: ...


class ScheduledTask:
    """One pending single-shot QTimer. Safe to cancel more than once."""

    def __init__(self, timer: QTimer, callback: Callable[[], None]) -> None:
        self._timer = timer
        self._callback = callback
        self._done = False
        timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return not self._done and self._timer.isActive()

    def cancel(self) -> None:
        if self._done:
            return
        self._done = True
        self._timer.stop()
        self._timer.deleteLater()

    def _fire(self) -> None:
        if self._done:
            return
        self._done = True
        self._timer.deleteLater()
        self._callback()


class QtTaskScheduler(QObject):
    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        if not math.isfinite(delay_seconds) or delay_seconds < 0:
            raise SchedulingError(f"Invalid delay: {delay_seconds!r}")

        ms = int(round(delay_seconds * 1000))
        if ms > _MAX_TIMER_MS:
            raise SchedulingError(f"Delay too long for a timer: {delay_seconds}s")

        timer = QTimer(self)
        timer.setSingleShot(True)
        task = ScheduledTask(timer, callback)
        timer.start(ms)

        if not timer.isActive():
            task.cancel()
            raise SchedulingError("Timer could not be started")
        return task
