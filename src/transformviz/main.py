"""
Application Initialization
==========================
This module wires the model, controller and view together and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Creates the QApplication (which also fixes where QSettings are stored).
3. Instantiates the state, the settings store and the controller.
4. Loads persisted values.
5. Passes the controller into the main window and fits the view once the
   window is laid out.
"""
import argparse
import logging
import sys

from PySide6.QtCore import QTimer

from transformviz.application import create_app
from transformviz.config import get_log_level
from transformviz.controller.app_controller import AppController
from transformviz.logging_config import setup_logging
from transformviz.model.io import SettingsStore
from transformviz.model.state import AppState
from transformviz.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="transformviz", description="2D transformation matrix visualizer")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--settings", default=None, help="use this INI file instead of the per-user settings")
    # Qt consumes its own options (-platform, -style, ...)
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv if argv is None else argv
    args = parse_args(argv[1:])

    # 1. Setup Logging (Console + Optional File)
    level = logging.DEBUG if args.debug else get_log_level()
    setup_logging(level=level, log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app(argv)

    # 3. Initialize state and persistence
    store = SettingsStore.from_file(args.settings) if args.settings else SettingsStore()
    logger.info(f"Settings file: {store.settings.fileName()}")
    controller = AppController(AppState(), store)

    # 4. Restore persisted values
    controller.load()

    # 5. Initialize the Main Window, passing the controller
    window = MainWindow(controller)
    window.show()
    # fit again once the canvas has its real size
    QTimer.singleShot(0, controller.auto_fit)

    # 6. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
