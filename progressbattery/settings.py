from __future__ import annotations

import math
from datetime import date

from PySide6.QtCore import QSettings

from progressbattery.constants import (
    APP_NAME,
    APP_ORG,
    DEFAULT_BIRTH_YEAR,
    DEFAULT_LIFE_EXPECTANCY_YEARS,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    MAX_LIFE_EXPECTANCY_YEARS,
    MAX_REFRESH_INTERVAL_SECONDS,
    MIN_BIRTH_YEAR,
    MIN_LIFE_EXPECTANCY_YEARS,
    MIN_REFRESH_INTERVAL_SECONDS,
)
from progressbattery.progress import Configuration, TimeScale

KEY_BIRTH_YEAR = "life/birth_year"
KEY_LIFE_EXPECTANCY = "life/life_expectancy_years"
KEY_REFRESH_INTERVAL = "general/refresh_interval_seconds"
KEY_SELECTED_SCALE = "general/selected_scale"


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _as_float(value: object, default: float) -> float:
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


class AppSettings:
    """Preference store backed by QSettings.

    Values are validated on every read, so a hand-edited or corrupt store
    falls back to defaults instead of reaching the calculator.
    """

    def __init__(self, q: QSettings | None = None) -> None:
        self._q = q if q is not None else QSettings(APP_ORG, APP_NAME)

    # ---------- generic store ----------

    def get(self, key: str, default: object = None) -> object:
        return self._q.value(key, default)

    def set(self, key: str, value: object) -> None:
        self._q.setValue(key, value)

    def sync(self) -> None:
        self._q.sync()

    # ---------- configuration provider ----------

    def configuration(self) -> Configuration:
        return Configuration(
            birth_year=self.birth_year(),
            life_expectancy_years=self.life_expectancy_years(),
            refresh_interval_seconds=self.refresh_interval_seconds(),
        )

    # ---------- typed accessors ----------

    def birth_year(self) -> int:
        value = int(_as_float(self.get(KEY_BIRTH_YEAR, DEFAULT_BIRTH_YEAR), DEFAULT_BIRTH_YEAR))
        return int(_clamp(value, MIN_BIRTH_YEAR, date.today().year))

    def set_birth_year(self, year: int) -> None:
        self.set(KEY_BIRTH_YEAR, int(_clamp(int(year), MIN_BIRTH_YEAR, date.today().year)))

    def life_expectancy_years(self) -> float:
        value = _as_float(self.get(KEY_LIFE_EXPECTANCY, DEFAULT_LIFE_EXPECTANCY_YEARS), DEFAULT_LIFE_EXPECTANCY_YEARS)
        return _clamp(value, MIN_LIFE_EXPECTANCY_YEARS, MAX_LIFE_EXPECTANCY_YEARS)

    def set_life_expectancy_years(self, years: float) -> None:
        years = _as_float(years, DEFAULT_LIFE_EXPECTANCY_YEARS)
        self.set(KEY_LIFE_EXPECTANCY, _clamp(years, MIN_LIFE_EXPECTANCY_YEARS, MAX_LIFE_EXPECTANCY_YEARS))

    def refresh_interval_seconds(self) -> float:
        value = _as_float(
            self.get(KEY_REFRESH_INTERVAL, DEFAULT_REFRESH_INTERVAL_SECONDS),
            DEFAULT_REFRESH_INTERVAL_SECONDS,
        )
        return _clamp(value, MIN_REFRESH_INTERVAL_SECONDS, MAX_REFRESH_INTERVAL_SECONDS)

    def set_refresh_interval_seconds(self, seconds: float) -> None:
        seconds = _as_float(seconds, DEFAULT_REFRESH_INTERVAL_SECONDS)
        self.set(KEY_REFRESH_INTERVAL, _clamp(seconds, MIN_REFRESH_INTERVAL_SECONDS, MAX_REFRESH_INTERVAL_SECONDS))

    def selected_scale(self) -> TimeScale:
        value = self._q.value(KEY_SELECTED_SCALE, TimeScale.HOUR.label, type=str)
        try:
            return TimeScale.from_label(value)
        except ValueError:
            return TimeScale.HOUR

    def set_selected_scale(self, scale: TimeScale) -> None:
        self.set(KEY_SELECTED_SCALE, scale.label)
