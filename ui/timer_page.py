"""
Timer page widget for the Pomodoro Timer application.
Contains the countdown display, phase selector and controls.
"""

import logging
from typing import Callable, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
    QButtonGroup, QAbstractButton
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QFont

from core.errors import TimerError
from core.models import Phase, Status, TimerState
from core.timer_poller import TimerPoller
from core.timer_service import TimerService


logger = logging.getLogger(__name__)

# Bright colors for dark theme
STATUS_COLORS = {
    Status.WORK_READY: "#808080",
    Status.BREAK_READY: "#808080",
    Status.RUNNING: "#66BB6A",
    Status.PAUSED: "#FFA726",
    Status.COMPLETE: "#42A5F5",
}


def _button_style(color: str, hover: str) -> str:
    return f"""
        QPushButton {{
            background-color: {color};
            color: white;
            border: none;
            border-radius: 5px;
            font-size: 14px;
            font-weight: bold;
        }}
        QPushButton:hover {{
            background-color: {hover};
        }}
        QPushButton:disabled {{
            background-color: #404040;
            color: #606060;
        }}
    """


class TimerPage(QWidget):
    """
    Main timer page with countdown display and controls.
    All commands go through the TimerService; the page only displays
    snapshots.
    """

    def __init__(
        self,
        service: TimerService,
        poller: TimerPoller,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self.service = service
        self.poller = poller

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Set up the UI components."""
        layout = QVBoxLayout(self)
        layout.setSpacing(20)
        layout.setContentsMargins(30, 30, 30, 30)

        # Phase selector
        phase_layout = QHBoxLayout()
        phase_layout.addStretch()
        self.phase_group = QButtonGroup(self)
        self.phase_group.setExclusive(True)

        self.work_btn = QPushButton("Work")
        self.break_btn = QPushButton("Break")
        for btn, phase in ((self.work_btn, Phase.WORK), (self.break_btn, Phase.BREAK)):
            btn.setCheckable(True)
            btn.setMinimumSize(100, 35)
            btn.setProperty("phase", phase.value)
            self.phase_group.addButton(btn)
            phase_layout.addWidget(btn)
        self.work_btn.setChecked(True)
        phase_layout.addStretch()
        layout.addLayout(phase_layout)

        # State label ("Ready to work", "Paused (break)", ...)
        self.state_label = QLabel("Ready to work")
        self.state_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        state_font = QFont()
        state_font.setPointSize(18)
        state_font.setBold(True)
        self.state_label.setFont(state_font)
        self.state_label.setStyleSheet("color: #808080; font-size: 20px;")
        layout.addWidget(self.state_label)

        # Big countdown display
        self.time_label = QLabel("25:00")
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        time_font = QFont()
        time_font.setPointSize(72)
        time_font.setBold(True)
        self.time_label.setFont(time_font)
        self.time_label.setStyleSheet("color: #e0e0e0; font-size: 80px;")
        self.time_label.setMinimumHeight(120)
        layout.addWidget(self.time_label)

        # Progress info
        self.progress_label = QLabel("")
        self.progress_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.progress_label.setStyleSheet("color: #a0a0a0; font-size: 14px;")
        layout.addWidget(self.progress_label)

        # Separator
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFrameShadow(QFrame.Shadow.Sunken)
        layout.addWidget(line)

        # Control buttons
        button_layout = QHBoxLayout()
        button_layout.setSpacing(15)

        self.start_btn = QPushButton("Start")
        self.start_btn.setStyleSheet(_button_style("#4CAF50", "#45a049"))

        self.pause_btn = QPushButton("Pause")
        self.pause_btn.setEnabled(False)
        self.pause_btn.setStyleSheet(_button_style("#FF9800", "#e68a00"))

        self.resume_btn = QPushButton("Resume")
        self.resume_btn.setEnabled(False)
        self.resume_btn.setStyleSheet(_button_style("#2196F3", "#1e88e5"))

        self.clear_btn = QPushButton("Clear")
        self.clear_btn.setStyleSheet(_button_style("#f44336", "#da190b"))

        for btn in (self.start_btn, self.pause_btn, self.resume_btn, self.clear_btn):
            btn.setMinimumSize(100, 45)
            button_layout.addWidget(btn)

        layout.addLayout(button_layout)

        # Rejected commands are reported here
        self.error_label = QLabel("")
        self.error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.error_label.setStyleSheet("color: #ef5350; font-size: 12px;")
        layout.addWidget(self.error_label)

        layout.addStretch()

    def _connect_signals(self):
        """Connect widget signals to slots."""
        self.poller.state_updated.connect(self._on_state_updated)
        self.poller.failed.connect(self._on_failed)

        self.start_btn.clicked.connect(self._on_start_clicked)
        self.pause_btn.clicked.connect(self._on_pause_clicked)
        self.resume_btn.clicked.connect(self._on_resume_clicked)
        self.clear_btn.clicked.connect(self._on_clear_clicked)
        self.phase_group.buttonClicked.connect(self._on_phase_clicked)

    def run_command(self, command: Callable[[], TimerState]) -> Optional[TimerState]:
        """
        Run a timer command and publish its result.
        Rejections are shown on the page instead of raised.
        """
        try:
            state = command()
        except TimerError as e:
            logger.warning("Timer command rejected: %s", e)
            self.error_label.setText(str(e))
            return None

        self.error_label.setText("")
        self.poller.publish(state)
        return state

    @Slot()
    def _on_start_clicked(self):
        self.run_command(self.service.start)

    @Slot()
    def _on_pause_clicked(self):
        self.run_command(self.service.pause)

    @Slot()
    def _on_resume_clicked(self):
        self.run_command(self.service.resume)

    @Slot()
    def _on_clear_clicked(self):
        self.run_command(self.service.clear)

    @Slot(QAbstractButton)
    def _on_phase_clicked(self, button: QAbstractButton):
        """Handle phase selector click."""
        phase_name = button.property("phase")
        state = self.run_command(lambda: self.service.set_phase(phase_name))
        if state is None and self.poller.last_state is not None:
            # The exclusive group already moved the check; put it back
            self._check_phase_button(self.poller.last_state.phase)

    def _check_phase_button(self, phase: Phase):
        phase_btn = self.work_btn if phase == Phase.WORK else self.break_btn
        if not phase_btn.isChecked():
            phase_btn.setChecked(True)

    @Slot(str)
    def _on_failed(self, message: str):
        self.error_label.setText(message)

    @Slot(object)
    def _on_state_updated(self, state: TimerState):
        """Update display and button states from a snapshot."""
        color = STATUS_COLORS.get(state.status, "#808080")
        self.state_label.setText(state.state_label)
        self.state_label.setStyleSheet(f"color: {color}; font-size: 20px;")
        self.time_label.setStyleSheet(f"color: {color}; font-size: 80px;")

        if state.status == Status.COMPLETE:
            self.time_label.setText(state.format_overtime() or state.format_remaining())
            self.progress_label.setText("Overtime since completion")
        else:
            self.time_label.setText(state.format_remaining())
            elapsed_min = state.elapsed_secs // 60
            elapsed_sec = state.elapsed_secs % 60
            total_min = state.duration_secs // 60
            self.progress_label.setText(
                f"{elapsed_min}:{elapsed_sec:02d} / {total_min}:00 "
                f"({state.progress_percentage:.0f}%)"
            )

        # Buttons follow the status
        self.start_btn.setEnabled(state.status not in (Status.RUNNING, Status.PAUSED))
        self.pause_btn.setEnabled(state.status == Status.RUNNING)
        self.resume_btn.setEnabled(state.status == Status.PAUSED)
        self.clear_btn.setEnabled(True)

        self._check_phase_button(state.phase)
