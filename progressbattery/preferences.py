from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from progressbattery.constants import (
    LIFE_EXPECTANCY_SLIDER_RANGE,
    MIN_BIRTH_YEAR,
    REFRESH_INTERVAL_CHOICES,
)
from progressbattery.progress import Configuration
from progressbattery.timeutil import plural


@dataclass(frozen=True)
class PreferencesValues:
    birth_year: int
    life_expectancy_years: float
    refresh_interval_seconds: float


class PreferencesDialog(QDialog):
    def __init__(self, config: Configuration, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Preferences")

        self.birth_year_spin = QSpinBox()
        self.birth_year_spin.setRange(MIN_BIRTH_YEAR, date.today().year)
        self.birth_year_spin.setValue(config.birth_year or date.today().year)

        lo, hi = LIFE_EXPECTANCY_SLIDER_RANGE
        self.life_slider = QSlider(Qt.Horizontal)
        self.life_slider.setRange(lo, hi)
        self.life_slider.setSingleStep(1)
        self.life_slider.setValue(int(round(config.life_expectancy_years)))
        self.life_label = QLabel()
        self.life_slider.valueChanged.connect(self._update_life_label)
        self._update_life_label(self.life_slider.value())

        self.interval_combo = QComboBox()
        for text, seconds in REFRESH_INTERVAL_CHOICES:
            self.interval_combo.addItem(text, seconds)
        index = self.interval_combo.findData(float(config.refresh_interval_seconds))
        if index < 0:
            seconds = config.refresh_interval_seconds
            self.interval_combo.addItem(plural(int(seconds), "second"), float(seconds))
            index = self.interval_combo.count() - 1
        self.interval_combo.setCurrentIndex(index)

        life_row = QHBoxLayout()
        life_row.addWidget(self.life_slider, 1)
        life_row.addWidget(self.life_label)

        form = QFormLayout()
        form.addRow("Birth Year:", self.birth_year_spin)
        form.addRow("Life Expectancy:", life_row)
        form.addRow("Update Interval:", self.interval_combo)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout()
        layout.addLayout(form)
        layout.addWidget(buttons)
        self.setLayout(layout)

    def _update_life_label(self, years: int) -> None:
        self.life_label.setText(f"{years} years")

    def values(self) -> PreferencesValues:
        return PreferencesValues(
            birth_year=self.birth_year_spin.value(),
            life_expectancy_years=float(self.life_slider.value()),
            refresh_interval_seconds=float(self.interval_combo.currentData()),
        )
