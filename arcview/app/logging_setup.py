from __future__ import annotations

import logging
import logging.config
import os
import queue
import sys
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

import faulthandler

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

from arcview.app.app_settings_manager import AppSettingsManager, RunMode
from arcview.utils.log_util import level_from_name

logger = logging.getLogger(__name__)

STARTUP_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}

# faulthandler writes to this stream until the process exits.
_crash_stream = None


@dataclass(frozen=True)
class LogPaths:
    log_file: Path
    crash_file: Path
    log_dir: Path


def default_log_dir(app_name: str) -> Path:
    """~/.<app_name>/logs, created on demand."""
    base = Path.home() / f".{app_name.lower()}" / "logs"
    base.mkdir(parents=True, exist_ok=True)
    return base


def _writable_log_dir(app_name: str) -> Path:
    """default_log_dir(), or ./logs when the home folder cannot be written."""
    try:
        d = default_log_dir(app_name)
        marker = d / ".write_test"
        marker.write_text("ok", encoding="utf-8")
        marker.unlink(missing_ok=True)
        return d
    except OSError:
        d = Path.cwd() / "logs"
        d.mkdir(parents=True, exist_ok=True)
        return d


def _enable_crash_log(crash_file: Path) -> None:
    global _crash_stream
    try:
        stream = open(crash_file, "w", encoding="utf-8")
    except OSError:
        logger.warning("Crash log unavailable: %s", crash_file)
        return
    faulthandler.enable(file=stream)
    previous, _crash_stream = _crash_stream, stream
    if previous is not None:
        previous.close()


def _log_uncaught(exc_type, exc, tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))


def setup_startup_logging(
        app_name: str,
        *,
        level_file: int = logging.DEBUG,
        level_console: int = logging.INFO,
        max_bytes: int = 2_000_000,
        backup_count: int = 5,
    ) -> LogPaths:
    """
    Logging that is live before the QApplication exists.
    - rotating file and stdout handlers on the root logger
    - native crashes dumped to <app_name>.crash.log
    - uncaught exceptions logged as CRITICAL
    LogSystem replaces the root handlers once settings are loaded.
    """
    log_dir = _writable_log_dir(app_name)
    paths = LogPaths(
        log_file=log_dir / f"{app_name}.log",
        crash_file=log_dir / f"{app_name}.crash.log",
        log_dir=log_dir,
    )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    fmt = logging.Formatter(STARTUP_FORMAT)
    file_handler = RotatingFileHandler(
        paths.log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    for handler, level in ((file_handler, level_file),
                           (logging.StreamHandler(sys.stdout), level_console)):
        handler.setLevel(level)
        handler.setFormatter(fmt)
        root.addHandler(handler)

    _enable_crash_log(paths.crash_file)
    sys.excepthook = _log_uncaught

    logger.info("%s starting (python %s, cwd=%s)", app_name, sys.version.split()[0], os.getcwd())
    logger.info("log_file=%s crash_file=%s", paths.log_file, paths.crash_file)
    return paths


def build_config(app_name: str,
                 root_level: int | None = None,
                 console_level: int = logging.INFO,
                 log_dir: Path | None = None) -> dict:
    """Build a logging config dict."""
    if root_level is None:
        root_level = level_from_name(os.getenv("ARCVIEW_LOG_LEVEL", "INFO"))
    log_dir = log_dir or default_log_dir(app_name)
    log_file = str(log_dir / f"{app_name}.log")

    fmt = "%(asctime)s.%(msecs)03dZ %(levelname)s %(process)d %(threadName)s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": fmt, "datefmt": datefmt,
            },
        },
        "handlers": {
            # File output goes through the queue.
            "queue": {"class": "logging.handlers.QueueHandler", "queue": queue.Queue(-1)},
            "console": {"class": "logging.StreamHandler", "formatter": "standard",
                        "level": logging.getLevelName(console_level)},
        },
        "root": {"level": logging.getLevelName(root_level), "handlers": ["queue", "console"]},
        # Consumed by LogSystem, not by dictConfig.
        "_file_settings": {
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": int(os.getenv("ARCVIEW_LOG_BACKUP_COUNT", 5)),
            "encoding": "utf-8",
            "format": fmt,
            "datefmt": datefmt
        },
    }


class LogSystem:
    """Thin wrapper owning the QueueListener that writes the log file."""
    def __init__(self, app_name: str, level: str | int | None = None, console_level: int = logging.INFO):
        root_level = level_from_name(level) if level is not None else None
        cfg = build_config(app_name, root_level, console_level)
        file_settings = cfg.pop("_file_settings")
        logging.config.dictConfig(cfg)

        qh: QueueHandler | None = None
        self._console_handler: logging.Handler | None = None
        for h in logging.getLogger().handlers:
            if qh is None and isinstance(h, QueueHandler):
                qh = h
            elif self._console_handler is None and isinstance(h, logging.StreamHandler):
                self._console_handler = h
        if qh is None:
            raise RuntimeError("QueueHandler not found.")

        self._file_handler = RotatingFileHandler(
            file_settings["filename"],
            maxBytes=file_settings["maxBytes"],
            backupCount=file_settings["backupCount"],
            encoding=file_settings["encoding"],
        )
        self._file_handler.setFormatter(
            logging.Formatter(file_settings["format"], file_settings["datefmt"]))

        self.listener = QueueListener(qh.queue, self._file_handler, respect_handler_level=True)
        self.listener.start()

    @classmethod
    def from_levels(cls, app_name: str, root_level: int, console_level: int = logging.INFO) -> LogSystem:
        """Create a LogSystem from numeric levels."""
        return cls(app_name, level=root_level, console_level=console_level)

    def apply_levels(self, root_level: int, console_level: int | None = None, file_level: int | None = None) -> None:
        """Change levels after startup."""
        logging.getLogger().setLevel(root_level)
        if self._console_handler is not None and console_level is not None:
            self._console_handler.setLevel(console_level)
        if file_level is not None:
            self._file_handler.setLevel(file_level)

    def stop(self):
        """Flush queued records and close the file."""
        if self.listener is None:
            return
        self.listener.stop()
        self.listener = None
        self._file_handler.close()


def apply_logging_policy(logs: LogSystem, settings: AppSettingsManager) -> None:
    """Pick log levels for the configured run mode."""
    mode = settings.run_mode

    if mode in (RunMode.DEVELOPMENT, RunMode.VERBOSE):
        console = logging.DEBUG
    else:
        console = level_from_name(settings.logging_level)

    logs.apply_levels(root_level=logging.DEBUG, console_level=console, file_level=logging.DEBUG)


def _qt_message(msg_type, context, message) -> None:
    logging.getLogger("Qt").log(_QT_LEVELS.get(msg_type, logging.ERROR), message)


def install_qt_message_handler() -> None:
    """Route qDebug/qWarning output into the "Qt" logger at the matching level."""
    qInstallMessageHandler(_qt_message)
    logging.getLogger("Qt").debug("Qt message handler installed.")
