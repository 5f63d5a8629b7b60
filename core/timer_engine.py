"""
Timer engine for the Pomodoro Timer application.
Implements the work/break state machine.
Remaining time is derived from a monotonic clock on every access, so the
countdown survives missed ticks, process suspension and wall-clock changes.
"""

import logging
import time
from typing import Callable, Optional

from .errors import (
    AlreadyPausedError,
    AlreadyRunningError,
    NotPausedError,
    NotRunningError,
)
from .models import OVERTIME_CAP_SECS, Phase, Status, TimerState, state_label


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class TimerEngine:
    """
    Core timer engine implementing a state machine.

    States:
        WORK_READY / BREAK_READY: Idle, waiting for the phase to be started
        RUNNING: Counting down
        PAUSED: Frozen with a saved remaining value
        COMPLETE: Reached zero; stays in the same phase until restarted,
            cleared or switched

    The engine is not thread-safe; TimerService serializes access to it.
    """

    def __init__(self, clock: Optional[Clock] = None):
        """
        Initialize the timer engine in the Work phase, ready to start.

        Args:
            clock: Monotonic clock returning seconds. Defaults to
                time.monotonic.
        """
        self._clock = clock or time.monotonic

        self.phase = Phase.WORK
        self.status = Status.WORK_READY
        self.remaining_secs = Phase.WORK.duration_secs
        self.duration_secs = Phase.WORK.duration_secs
        self.completion_flag = False

        # Monotonic reference instants
        self.started_at: Optional[float] = None
        self.completed_at: Optional[float] = None

        # Remaining seconds saved per phase when suspended
        self.paused_work_secs: Optional[int] = None
        self.paused_break_secs: Optional[int] = None

    @property
    def is_running(self) -> bool:
        """Check if timer is actively counting down."""
        return self.status == Status.RUNNING

    @property
    def is_paused(self) -> bool:
        """Check if timer is paused."""
        return self.status == Status.PAUSED

    @property
    def is_complete(self) -> bool:
        """Check if the current interval has finished."""
        return self.status == Status.COMPLETE

    @property
    def is_ready(self) -> bool:
        """Check if timer is idle and waiting to start."""
        return self.status in (Status.WORK_READY, Status.BREAK_READY)

    def get_state(self) -> TimerState:
        """Bring the countdown up to date and return a snapshot."""
        now = self._clock()
        self._update_remaining(now)
        return self._snapshot(now)

    def start(self) -> TimerState:
        """
        Start a fresh interval in the current phase.

        A completed interval restarts the same phase; the phase never
        advances on its own.

        Raises:
            AlreadyRunningError: The timer is running.
            AlreadyPausedError: The timer is paused; use resume().
        """
        now = self._clock()
        self._update_remaining(now)

        if self.status == Status.RUNNING:
            raise AlreadyRunningError()
        if self.status == Status.PAUSED:
            raise AlreadyPausedError()

        self.status = Status.RUNNING
        self.duration_secs = self.phase.duration_secs
        self.remaining_secs = self.duration_secs
        self.completion_flag = False
        self.started_at = now
        self.completed_at = None
        self._set_saved_remaining(self.phase, None)

        logger.info("Started %s interval (%ds)", self.phase.value, self.duration_secs)
        return self._snapshot(now)

    def pause(self) -> TimerState:
        """
        Freeze the countdown at its current value.

        Raises:
            NotRunningError: The timer is not running, or the interval
                finished before the pause arrived.
        """
        now = self._clock()
        self._update_remaining(now)

        if self.status != Status.RUNNING:
            raise NotRunningError()

        self.status = Status.PAUSED
        self._set_saved_remaining(self.phase, self.remaining_secs)
        self.started_at = None

        logger.info("Paused %s interval at %ds", self.phase.value, self.remaining_secs)
        return self._snapshot(now)

    def resume(self) -> TimerState:
        """
        Continue counting down from the paused value.

        Raises:
            NotPausedError: The timer is not paused.
        """
        now = self._clock()

        if self.status != Status.PAUSED:
            raise NotPausedError()

        # The saved slot already holds remaining_secs and becomes the new
        # starting point for the countdown.
        self._set_saved_remaining(self.phase, self.remaining_secs)
        self.status = Status.RUNNING
        self.started_at = now

        logger.info("Resumed %s interval at %ds", self.phase.value, self.remaining_secs)
        return self._snapshot(now)

    def clear(self) -> TimerState:
        """Reset the current phase to its ready state. Never changes phase."""
        now = self._clock()

        self.status = self.phase.ready_status
        self.duration_secs = self.phase.duration_secs
        self.remaining_secs = self.duration_secs
        self.completion_flag = False
        self.started_at = None
        self.completed_at = None
        self._set_saved_remaining(self.phase, None)

        logger.info("Cleared %s phase", self.phase.value)
        return self._snapshot(now)

    def set_phase(self, new_phase: Phase) -> TimerState:
        """
        Switch to another phase, suspending the outgoing interval.

        Selecting the current phase is a no-op whatever the status. The
        outgoing phase keeps its remaining time until it is started again
        or cleared; the incoming phase restores its own saved time as
        PAUSED, or shows its full duration as ready.

        Args:
            new_phase: Phase to switch to.
        """
        now = self._clock()
        self._update_remaining(now)

        if new_phase == self.phase:
            return self._snapshot(now)

        old_phase = self.phase
        if self.status in (Status.RUNNING, Status.PAUSED):
            self._set_saved_remaining(old_phase, self.remaining_secs)
            self.started_at = None

        self.phase = new_phase
        self.duration_secs = new_phase.duration_secs
        saved = self._saved_remaining(new_phase)
        if saved is not None:
            self.remaining_secs = saved
            self.status = Status.PAUSED
        else:
            self.remaining_secs = self.duration_secs
            self.status = new_phase.ready_status

        self.completion_flag = False
        self.completed_at = None

        logger.info(
            "Switched phase %s -> %s (%s, %ds)",
            old_phase.value, new_phase.value, self.status.value, self.remaining_secs
        )
        return self._snapshot(now)

    def _update_remaining(self, now: float):
        """
        Recompute remaining time while running.
        Fires completion when the interval has run out.
        """
        if self.status != Status.RUNNING or self.started_at is None:
            return

        elapsed = _whole_seconds(now - self.started_at)
        saved = self._saved_remaining(self.phase)
        initial = saved if saved is not None else self.duration_secs

        if elapsed >= initial:
            self._handle_completion(now)
        else:
            self.remaining_secs = initial - elapsed

    def _handle_completion(self, now: float):
        """Mark the interval complete, staying in the current phase."""
        self.completion_flag = True
        self.remaining_secs = 0
        self.status = Status.COMPLETE
        self.started_at = None
        self.completed_at = now

        logger.info("%s interval completed", self.phase.value.capitalize())

    def _overtime_secs(self, now: float) -> Optional[int]:
        """Seconds since completion, capped at 59:59."""
        if self.status != Status.COMPLETE or self.completed_at is None:
            return None
        return min(_whole_seconds(now - self.completed_at), OVERTIME_CAP_SECS)

    def _saved_remaining(self, phase: Phase) -> Optional[int]:
        if phase is Phase.WORK:
            return self.paused_work_secs
        return self.paused_break_secs

    def _set_saved_remaining(self, phase: Phase, value: Optional[int]):
        if phase is Phase.WORK:
            self.paused_work_secs = value
        else:
            self.paused_break_secs = value

    def _snapshot(self, now: float) -> TimerState:
        return TimerState(
            phase=self.phase,
            status=self.status,
            remaining_secs=self.remaining_secs,
            duration_secs=self.duration_secs,
            completion_flag=self.completion_flag,
            state_label=state_label(self.phase, self.status),
            overtime_secs=self._overtime_secs(now),
        )


def _whole_seconds(delta: float) -> int:
    """Truncate a clock difference to whole seconds, never negative."""
    return max(0, int(delta))
