from __future__ import annotations

import enum
import logging
import math
from datetime import datetime
from typing import Callable, Protocol

from progressbattery.constants import DEFAULT_REFRESH_INTERVAL_SECONDS
from progressbattery.progress import Configuration, ProgressResult, TimeScale, compute_progress
from progressbattery.timers import SchedulingError, TaskHandle, TaskScheduler
from progressbattery.timeutil import local_now

log = logging.getLogger(__name__)


class ConfigurationProvider(Protocol):
    def configuration(self) -> Configuration: ...


class SchedulerState(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    STOPPED = "stopped"


class RefreshScheduler:
    """Keeps the published progress in step with the wall clock.

    Every tick recomputes with a fresh Configuration, publishes, and arms the
    next one-shot wake-up. Arming always cancels the previous handle first, so
    there is never more than one wake-up in flight. Once shut down the
    scheduler ignores every further call.
    """

    def __init__(
        self,
        config_provider: ConfigurationProvider,
        on_progress_updated: Callable[[ProgressResult], None],
        task_scheduler: TaskScheduler,
        *,
        scale: TimeScale = TimeScale.HOUR,
        clock: Callable[[], datetime] = local_now,
        on_scheduling_failed: Callable[[SchedulingError], None] | None = None,
    ) -> None:
        self._config_provider = config_provider
        self._on_progress_updated = on_progress_updated
        self._task_scheduler = task_scheduler
        self._clock = clock
        self._on_scheduling_failed = on_scheduling_failed

        self._scale = scale
        self._state = SchedulerState.IDLE
        self._last_result: ProgressResult | None = None
        self._pending: TaskHandle | None = None
        self._interval_seconds: float | None = None

    # ---------- properties ----------

    @property
    def scale(self) -> TimeScale:
        return self._scale

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def last_result(self) -> ProgressResult | None:
        return self._last_result

    @property
    def interval_seconds(self) -> float | None:
        return self._interval_seconds

    @property
    def is_armed(self) -> bool:
        return self._pending is not None

    # ---------- lifecycle ----------

    def start(self) -> None:
        if self._state is not SchedulerState.IDLE:
            return
        self._state = SchedulerState.ARMED
        config = self._config_provider.configuration()
        try:
            self._publish(config)
        finally:
            # An interval set while idle wins over the stored one for the first arm.
            interval = self._interval_seconds
            self._arm(config.refresh_interval_seconds if interval is None else interval)

    def shutdown(self) -> None:
        self._cancel_pending()
        self._state = SchedulerState.STOPPED

    # ---------- events ----------

    def select_scale(self, scale: TimeScale) -> None:
        if self._state is SchedulerState.STOPPED:
            return
        self._scale = scale
        self._publish(self._config_provider.configuration())

    def refresh(self) -> None:
        if self._state is SchedulerState.STOPPED:
            return
        self._publish(self._config_provider.configuration())

    def on_interval_changed(self, new_interval_seconds: float) -> None:
        if self._state is SchedulerState.STOPPED:
            return
        if self._state is SchedulerState.IDLE:
            self._interval_seconds = self._valid_interval(new_interval_seconds)
            return
        self._arm(new_interval_seconds)

    def tick(self) -> None:
        if self._state is not SchedulerState.ARMED:
            return
        # The handle that woke us up has fired.
        self._pending = None
        config = self._config_provider.configuration()
        log.debug("Tick (%s)", self._scale.label)
        try:
            self._publish(config)
        finally:
            self._arm(config.refresh_interval_seconds)

    # ---------- internal ----------

    def _publish(self, config: Configuration) -> None:
        result = compute_progress(self._scale, self._clock(), config)
        self._last_result = result
        self._on_progress_updated(result)

    def _valid_interval(self, seconds: float) -> float:
        try:
            value = float(seconds)
        except (TypeError, ValueError):
            value = math.nan
        if not math.isfinite(value) or value <= 0:
            log.warning("Invalid refresh interval %r, using %ss", seconds, DEFAULT_REFRESH_INTERVAL_SECONDS)
            return DEFAULT_REFRESH_INTERVAL_SECONDS
        return value

    def _arm(self, interval_seconds: float) -> None:
        self._cancel_pending()
        interval = self._valid_interval(interval_seconds)
        self._interval_seconds = interval
        try:
            self._pending = self._task_scheduler.schedule(interval, self.tick)
        except SchedulingError as e:
            log.error("Could not schedule the next refresh in %ss: %s", interval, e)
            if self._on_scheduling_failed is not None:
                self._on_scheduling_failed(e)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
