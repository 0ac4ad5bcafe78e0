"""Application entry point helpers."""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from PyQt5 import QtCore, QtWidgets

from .core.settings_manager import SettingsManager, DEFAULT_SETTINGS_FILE
from .ui.main_window import MainWindow

LOG_FILE = "light_tracker.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_QT_ATTRIBUTES_CONFIGURED = False


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = LOG_FILE):
    """Configure logging for the application."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


def _parse_source(value: str):
    """Camera index when numeric, otherwise a video file path or stream URL."""
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="light-tracker",
        description="Estimate the direction of the dominant light source seen by a camera."
    )
    parser.add_argument("--source", type=_parse_source, default=None,
                        help="camera index or video file path (default: from settings, camera 0)")
    parser.add_argument("--grid-size", type=int, default=None,
                        help="cells per axis used for brightness analysis")
    parser.add_argument("--no-mirror", action="store_true",
                        help="do not mirror frames horizontally")
    parser.add_argument("--settings", default=DEFAULT_SETTINGS_FILE,
                        help="path of the JSON settings file")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def load_settings(args: argparse.Namespace) -> SettingsManager:
    """Load settings and apply command-line overrides (not persisted until save)."""
    manager = SettingsManager(args.settings)
    if args.source is not None:
        manager.settings.video_source = args.source
    if args.grid_size is not None:
        manager.settings.grid_size = args.grid_size
    if args.no_mirror:
        manager.settings.mirror = False
    return manager


def _configure_qt_attributes():
    """Apply high-DPI friendly Qt attributes once before QApplication exists."""
    global _QT_ATTRIBUTES_CONFIGURED
    if _QT_ATTRIBUTES_CONFIGURED:
        return

    for name in ("AA_EnableHighDpiScaling", "AA_UseHighDpiPixmaps"):
        attribute = getattr(QtCore.Qt, name, None)
        if attribute is not None:
            QtCore.QCoreApplication.setAttribute(attribute)

    _QT_ATTRIBUTES_CONFIGURED = True


def _exec_app(app: QtWidgets.QApplication) -> int:
    """Call the correct exec variant for the current Qt version."""
    exec_fn: Callable[[], int] = getattr(app, "exec", app.exec_)
    return exec_fn()


def main(argv: Optional[List[str]] = None) -> int:
    """Launch the Light Tracker GUI."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    logging.info("Starting Light Tracker")

    settings_manager = load_settings(args)
    issues = settings_manager.validate_settings()
    if issues:
        for issue in issues:
            logging.error(f"Invalid setting: {issue}")
        return 2

    _configure_qt_attributes()
    app = QtWidgets.QApplication(sys.argv[:1])
    app.setApplicationName("Light Tracker")

    try:
        window = MainWindow(settings_manager)
    except Exception as exc:  # pragma: no cover - guard during GUI startup
        logging.exception("Failed to initialize Light Tracker UI")
        QtWidgets.QMessageBox.critical(
            None,
            "Initialization Error",
            f"Light Tracker could not start:\n{exc}",
        )
        return 1

    window.show()
    return _exec_app(app)


if __name__ == "__main__":
    sys.exit(main())
