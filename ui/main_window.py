"""
Main window for the Pomodoro Timer application.
Hosts the timer page and the system tray icon.
"""

import logging
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSystemTrayIcon, QMenu, QApplication
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QIcon, QAction, QCloseEvent, QPixmap, QPainter, QColor

from core.models import AppSettings, Status, TimerState
from core.notifications import NotificationManager
from core.timer_poller import TimerPoller
from core.timer_service import TimerService

from .timer_page import TimerPage


logger = logging.getLogger(__name__)


def create_app_icon() -> QIcon:
    """Create a simple app icon programmatically."""
    sizes = [16, 32, 48, 64]
    icon = QIcon()

    for size in sizes:
        pixmap = QPixmap(size, size)
        pixmap.fill(Qt.GlobalColor.transparent)

        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Tomato body
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor("#E53935"))
        margin = size // 8
        painter.drawEllipse(margin, margin + size // 16, size - 2*margin, size - 2*margin)

        # Leaf
        painter.setBrush(QColor("#66BB6A"))
        leaf = max(2, size // 5)
        painter.drawEllipse(size // 2 - leaf // 2, margin - leaf // 4, leaf, leaf // 2 + 1)

        painter.end()
        icon.addPixmap(pixmap)

    return icon


class MainWindow(QMainWindow):
    """
    Main application window.
    Receives the shared TimerService from the startup routine.
    """

    def __init__(
        self,
        service: TimerService,
        settings: Optional[AppSettings] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self.service = service
        self.settings = settings or AppSettings()

        self.poller = TimerPoller(self.service, self.settings.poll_interval_ms, self)
        self.notifications = NotificationManager(
            sound_enabled=self.settings.sound_enabled,
            notification_enabled=self.settings.notification_enabled,
            parent=self,
        )

        self.setWindowTitle("Pomodoro Timer")
        self.setMinimumSize(480, 420)
        self.resize(520, 460)

        self.app_icon = create_app_icon()
        self.setWindowIcon(self.app_icon)

        self._setup_ui()
        self._setup_tray()
        self._connect_signals()

        self.poller.start()

    def _setup_ui(self):
        """Set up the main UI."""
        central = QWidget()
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        self.timer_page = TimerPage(self.service, self.poller)
        layout.addWidget(self.timer_page)

    def _setup_tray(self):
        """Set up system tray icon."""
        if not QSystemTrayIcon.isSystemTrayAvailable():
            logger.info("System tray not available")
            return

        self.tray_icon = QSystemTrayIcon(self.app_icon, self)
        self.tray_icon.setToolTip("Pomodoro Timer")

        tray_menu = QMenu()

        show_action = QAction("Show", self)
        show_action.triggered.connect(self._show_window)
        tray_menu.addAction(show_action)

        tray_menu.addSeparator()

        self.tray_start_action = QAction("Start", self)
        self.tray_start_action.triggered.connect(self._tray_start)
        tray_menu.addAction(self.tray_start_action)

        self.tray_pause_action = QAction("Pause", self)
        self.tray_pause_action.triggered.connect(self._tray_toggle_pause)
        self.tray_pause_action.setEnabled(False)
        tray_menu.addAction(self.tray_pause_action)

        self.tray_clear_action = QAction("Clear", self)
        self.tray_clear_action.triggered.connect(self._tray_clear)
        tray_menu.addAction(self.tray_clear_action)

        tray_menu.addSeparator()

        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self._quit_app)
        tray_menu.addAction(quit_action)

        self.tray_icon.setContextMenu(tray_menu)
        self.tray_icon.activated.connect(self._on_tray_activated)
        self.tray_icon.show()

        self.notifications.set_tray_icon(self.tray_icon)

    def _connect_signals(self):
        """Connect signals from various components."""
        self.poller.state_updated.connect(self._on_state_updated)
        self.poller.completed.connect(self.notifications.notify_complete)

    @Slot(object)
    def _on_state_updated(self, state: TimerState):
        """Mirror the timer in the tray tooltip and menu."""
        if not hasattr(self, 'tray_icon'):
            return

        if state.status == Status.COMPLETE:
            detail = state.format_overtime()
        else:
            detail = state.format_remaining()
        self.tray_icon.setToolTip(f"Pomodoro Timer - {state.state_label}\n{detail}")

        is_running = state.status == Status.RUNNING
        is_paused = state.status == Status.PAUSED
        self.tray_start_action.setEnabled(not (is_running or is_paused))
        self.tray_pause_action.setEnabled(is_running or is_paused)
        self.tray_pause_action.setText("Resume" if is_paused else "Pause")

    @Slot(QSystemTrayIcon.ActivationReason)
    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason):
        """Handle tray icon activation."""
        if reason == QSystemTrayIcon.ActivationReason.DoubleClick:
            self._show_window()

    @Slot()
    def _show_window(self):
        """Show and bring window to front."""
        self.show()
        self.raise_()
        self.activateWindow()

    @Slot()
    def _tray_start(self):
        self.timer_page.run_command(self.service.start)

    @Slot()
    def _tray_toggle_pause(self):
        """Toggle pause from tray."""
        last = self.poller.last_state
        if last is not None and last.status == Status.PAUSED:
            self.timer_page.run_command(self.service.resume)
        else:
            self.timer_page.run_command(self.service.pause)

    @Slot()
    def _tray_clear(self):
        self.timer_page.run_command(self.service.clear)

    @Slot()
    def _quit_app(self):
        """Quit the application."""
        self._cleanup()
        QApplication.quit()

    def closeEvent(self, event: QCloseEvent):
        """Minimize to tray while an interval is in progress."""
        last = self.poller.last_state
        in_progress = last is not None and last.status in (Status.RUNNING, Status.PAUSED)
        if in_progress and hasattr(self, 'tray_icon') and self.tray_icon.isVisible():
            event.ignore()
            self.hide()
            self.tray_icon.showMessage(
                "Pomodoro Timer",
                "Timer still running. Click tray icon to show window.",
                QSystemTrayIcon.MessageIcon.Information,
                2000
            )
            return

        self._cleanup()
        event.accept()

    def _cleanup(self):
        """Clean up resources before exit."""
        self.poller.stop()
        self.notifications.cleanup()

        if hasattr(self, 'tray_icon'):
            self.tray_icon.hide()
