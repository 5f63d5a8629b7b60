#!/usr/bin/env python3
"""
Pomodoro Timer - A desktop work/break interval timer.

- Fixed 25 minute work and 5 minute break intervals
- Pause, resume and switch phase without losing the countdown
- Completed intervals wait for you and show how long ago they finished
- Completion chime and desktop notification

Usage:
    pip install -e .
    python main.py [--no-sound] [--no-notifications] [--debug]
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from core.logging_config import setup_logging
from core.models import AppSettings
from core.timer_service import create_timer_service


logger = logging.getLogger("pomodoro")


STYLESHEET = """
    /* ==================== DARK THEME ==================== */

    /* Main Window & Widgets */
    QMainWindow, QWidget {
        background-color: #1e1e1e;
        color: #e0e0e0;
    }

    /* Labels */
    QLabel {
        color: #e0e0e0;
        font-size: 13px;
    }

    /* Push Button - Default */
    QPushButton {
        padding: 10px 18px;
        border-radius: 5px;
        background-color: #404040;
        color: #ffffff;
        font-size: 13px;
        font-weight: bold;
        border: none;
    }
    QPushButton:hover {
        background-color: #505050;
    }
    QPushButton:pressed {
        background-color: #353535;
    }
    QPushButton:checked {
        background-color: #4CAF50;
    }
    QPushButton:disabled {
        background-color: #2d2d2d;
        color: #606060;
    }

    /* Tool Tip */
    QToolTip {
        background-color: #2d2d2d;
        color: #ffffff;
        border: 1px solid #4CAF50;
        padding: 5px;
        border-radius: 3px;
    }

    /* Menu */
    QMenu {
        background-color: #2d2d2d;
        color: #e0e0e0;
        border: 1px solid #404040;
        padding: 5px;
    }
    QMenu::item {
        padding: 8px 25px;
        border-radius: 3px;
    }
    QMenu::item:selected {
        background-color: #4CAF50;
        color: #ffffff;
    }
"""


def parse_settings(argv: Optional[List[str]] = None) -> AppSettings:
    """Build application settings from command-line options."""
    parser = argparse.ArgumentParser(
        prog="pomodoro-timer",
        description="Pomodoro-style work/break interval timer.",
    )
    parser.add_argument(
        "--no-sound", action="store_true",
        help="do not play the completion chime",
    )
    parser.add_argument(
        "--no-notifications", action="store_true",
        help="do not show desktop notifications",
    )
    parser.add_argument(
        "--poll-interval", type=int, default=1000, metavar="MS",
        help="display refresh interval in milliseconds (default: 1000)",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="logging level (default: WARNING)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="shorthand for --log-level DEBUG",
    )
    # Qt consumes its own arguments; ignore anything we do not know
    args, _ = parser.parse_known_args(argv)

    return AppSettings(
        sound_enabled=not args.no_sound,
        notification_enabled=not args.no_notifications,
        poll_interval_ms=args.poll_interval,
        log_level="DEBUG" if args.debug else args.log_level,
    )


def setup_exception_handling():
    """Log unhandled exceptions instead of letting Qt swallow them."""
    def exception_hook(exctype, value, traceback):
        logger.critical(
            "Unhandled exception: %s: %s", exctype.__name__, value,
            exc_info=(exctype, value, traceback),
        )
        sys.__excepthook__(exctype, value, traceback)

    sys.excepthook = exception_hook


def setup_signal_handlers(app: QApplication):
    """Set up signal handlers for graceful shutdown."""
    def signal_handler(signum, frame):
        logger.info("Received signal %s, shutting down...", signum)
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Pomodoro Timer application."""
    if argv is None:
        argv = sys.argv[1:]

    settings = parse_settings(argv)
    setup_logging(settings.log_level)
    setup_exception_handling()

    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication([sys.argv[0], *argv])
    app.setApplicationName("Pomodoro Timer")
    app.setApplicationDisplayName("Pomodoro Timer")
    app.setOrganizationName("PomodoroTimer")
    app.setStyle("Fusion")
    app.setStyleSheet(STYLESHEET)

    setup_signal_handlers(app)

    # The one timer for this process, shared by every command handler
    service = create_timer_service(settings.lock_timeout_secs)

    from ui.main_window import MainWindow
    window = MainWindow(service, settings)
    window.show()

    logger.info("Pomodoro Timer started")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
