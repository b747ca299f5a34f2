# NOTE:
# Startup diagnostics (logging / Qt message handler) must be set up
#  before creating the QApplication instance.

import logging
import sys

from PySide6 import QtWidgets

from arcview.app.app_settings_manager import AppSettingsManager
from arcview.app.logging_setup import (
    LogSystem,
    apply_logging_policy,
    install_qt_message_handler,
    setup_startup_logging,
)

logger = logging.getLogger(__name__)


def main():
    setup_startup_logging(app_name="arcview")
    install_qt_message_handler()

    # Reuse an existing QApplication if there is one.
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(sys.argv)

    settings_mgr = AppSettingsManager()
    logs = LogSystem("arcview", level=settings_mgr.logging_level)
    apply_logging_policy(logs, settings_mgr)
    logger.info("App start (run_mode=%s)", settings_mgr.run_mode)

    from arcview.ui.mainwindow import MainWindow
    main_window = MainWindow(settings_mgr)

    # Stop the log listener when Qt shuts down.
    app.aboutToQuit.connect(logs.stop)
    try:
        rc = app.exec()
        logger.info("App exit (rc=%s)", rc)
        sys.exit(rc)
    finally:
        logs.stop()


if __name__ == "__main__":
    main()
