from __future__ import annotations

import logging
import os
import sys

from PySide6.QtWidgets import QApplication, QSystemTrayIcon

from progressbattery.constants import APP_NAME, APP_ORG, LOG_LEVEL_ENV
from progressbattery.controller import TrayController

log = logging.getLogger(__name__)


def setup_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    setup_logging()

    app = QApplication(argv)
    app.setOrganizationName(APP_ORG)
    app.setApplicationName(APP_NAME)
    # Tray-only: closing the preferences dialog must not end the app.
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        log.error("No system tray available on this desktop")
        return 1

    controller = TrayController()
    controller.setParent(app)
    app.aboutToQuit.connect(controller.shutdown)
    controller.start()

    return app.exec()
