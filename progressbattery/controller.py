from __future__ import annotations

import logging
from functools import partial

from PySide6.QtCore import QObject, Slot
from PySide6.QtGui import QAction, QActionGroup
from PySide6.QtWidgets import QApplication, QDialog, QMenu, QMessageBox, QSystemTrayIcon

from progressbattery.constants import APP_DESCRIPTION, APP_NAME, APP_VERSION
from progressbattery.icon import progress_icon
from progressbattery.preferences import PreferencesDialog, PreferencesValues
from progressbattery.progress import ProgressResult, TimeScale, describe_remaining
from progressbattery.refresh import RefreshScheduler
from progressbattery.settings import AppSettings
from progressbattery.timers import QtTaskScheduler, SchedulingError

log = logging.getLogger(__name__)


class TrayController(QObject):
    def __init__(self, settings: AppSettings | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._settings = settings if settings is not None else AppSettings()
        self._result: ProgressResult | None = None

        self._tasks = QtTaskScheduler(self)
        self._scheduler = RefreshScheduler(
            self._settings,
            self._on_progress_updated,
            self._tasks,
            scale=self._settings.selected_scale(),
            on_scheduling_failed=self._on_scheduling_failed,
        )

        self._tray = QSystemTrayIcon(self)
        self._menu = QMenu()
        self._build_menu()
        self._tray.setContextMenu(self._menu)

    # ---------- properties ----------

    @property
    def current_scale(self) -> str:
        return self._scheduler.scale.label

    @property
    def percentage(self) -> int:
        return self._result.percentage if self._result else 0

    @property
    def tooltip(self) -> str:
        if self._result is None:
            return APP_NAME
        text = f"{self._result.scale.label}: {self._result.percentage}%"
        remaining = describe_remaining(self._result)
        return f"{text}\n{remaining}" if remaining else text

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    @property
    def menu(self) -> QMenu:
        return self._menu

    # ---------- lifecycle ----------

    def start(self) -> None:
        self._tray.show()
        self._scheduler.start()

    @Slot()
    def shutdown(self) -> None:
        self._scheduler.shutdown()
        self._tray.hide()

    # ---------- internal ----------

    def _build_menu(self) -> None:
        self._summary_action = QAction(APP_NAME, self)
        self._summary_action.setEnabled(False)
        self._menu.addAction(self._summary_action)
        self._menu.addSeparator()

        self._scale_group = QActionGroup(self)
        self._scale_group.setExclusive(True)
        self._scale_actions: dict[TimeScale, QAction] = {}
        for scale in TimeScale:
            action = QAction(scale.label, self)
            action.setCheckable(True)
            action.setChecked(scale is self._scheduler.scale)
            action.triggered.connect(partial(self._on_scale_action, scale))
            self._scale_group.addAction(action)
            self._menu.addAction(action)
            self._scale_actions[scale] = action

        self._menu.addSeparator()

        preferences = QAction("Preferences...", self)
        preferences.triggered.connect(self.openPreferences)
        self._menu.addAction(preferences)

        about = QAction("About", self)
        about.triggered.connect(self.showAbout)
        self._menu.addAction(about)

        quit_action = QAction("Quit", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.quit)
        self._menu.addAction(quit_action)

    def _on_scale_action(self, scale: TimeScale, checked: bool = False) -> None:
        self.selectScale(scale.label)

    def _on_progress_updated(self, result: ProgressResult) -> None:
        self._result = result
        self._tray.setIcon(progress_icon(result.display_fraction))
        self._tray.setToolTip(self.tooltip)
        self._summary_action.setText(f"{result.percentage}% of {result.scale.label.lower()}")

    def _on_scheduling_failed(self, error: SchedulingError) -> None:
        self._tray.showMessage(
            APP_NAME,
            f"Progress updates have stopped: {error}",
            QSystemTrayIcon.Warning,
        )

    # ---------- slots ----------

    @Slot(str)
    def selectScale(self, label: str) -> None:
        try:
            scale = TimeScale.from_label(label)
        except ValueError:
            log.warning("Ignoring unknown scale %r", label)
            return

        self._scale_actions[scale].setChecked(True)
        self._settings.set_selected_scale(scale)
        self._scheduler.select_scale(scale)

    @Slot()
    def openPreferences(self) -> None:
        dialog = PreferencesDialog(self._settings.configuration())
        if dialog.exec() == QDialog.Accepted:
            self.applyPreferences(dialog.values())

    def applyPreferences(self, values: PreferencesValues) -> None:
        before = self._settings.configuration()

        self._settings.set_birth_year(values.birth_year)
        self._settings.set_life_expectancy_years(values.life_expectancy_years)
        self._settings.set_refresh_interval_seconds(values.refresh_interval_seconds)
        after = self._settings.configuration()

        if after.refresh_interval_seconds != before.refresh_interval_seconds:
            self._scheduler.on_interval_changed(after.refresh_interval_seconds)
        if (after.birth_year, after.life_expectancy_years) != (before.birth_year, before.life_expectancy_years):
            self._scheduler.refresh()

    @Slot()
    def showAbout(self) -> None:
        QMessageBox.about(
            None,
            f"About {APP_NAME}",
            f"{APP_NAME}\nVersion {APP_VERSION}\n\n{APP_DESCRIPTION}",
        )

    @Slot()
    def quit(self) -> None:
        self.shutdown()
        app = QApplication.instance()
        if app is not None:
            app.quit()
