"""
Qt poller for the Pomodoro Timer application.
Reads the timer state at a fixed interval and turns it into Qt signals.
The poller never changes the timer; countdown math stays in the engine.
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from .errors import TimerError
from .models import TimerState
from .timer_service import TimerService


logger = logging.getLogger(__name__)


class TimerPoller(QObject):
    """
    Periodically fetches the timer snapshot.

    Signals:
        state_updated: Emitted after every successful read with the TimerState
        completed: Emitted once when completion_flag turns on
        failed: Emitted with the error message when a read is rejected
    """

    state_updated = Signal(object)
    completed = Signal(object)
    failed = Signal(str)

    # Poll interval in milliseconds
    DEFAULT_INTERVAL_MS = 1000

    def __init__(
        self,
        service: TimerService,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        parent: Optional[QObject] = None
    ):
        """
        Initialize the poller.

        Args:
            service: Shared timer service to read from.
            interval_ms: Poll interval in milliseconds.
            parent: Optional Qt parent object.
        """
        super().__init__(parent)

        self.service = service
        self._last_completion_flag = False
        self._last_state: Optional[TimerState] = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self.poll)

    @property
    def last_state(self) -> Optional[TimerState]:
        """Most recent snapshot, or None before the first read."""
        return self._last_state

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    def start(self):
        """Start polling and publish the current state immediately."""
        self._qt_timer.start()
        self.poll()

    def stop(self):
        self._qt_timer.stop()

    @Slot()
    def poll(self) -> Optional[TimerState]:
        """Read the current state and emit the matching signals."""
        try:
            state = self.service.get_state()
        except TimerError as e:
            logger.error("Could not read timer state: %s", e)
            self.failed.emit(str(e))
            return None

        self.publish(state)
        return state

    def publish(self, state: TimerState):
        """
        Emit signals for a snapshot obtained elsewhere (e.g. a command result).
        The completion cue fires only on the rising edge of completion_flag.
        """
        self._last_state = state
        self.state_updated.emit(state)

        if state.completion_flag and not self._last_completion_flag:
            logger.info("%s", state.state_label)
            self.completed.emit(state)
        self._last_completion_flag = state.completion_flag
