"""
Data models for the Pomodoro Timer application.
Uses dataclasses for clean, type-annotated data structures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


WORK_DURATION_SECS = 1500  # 25 minutes
BREAK_DURATION_SECS = 300  # 5 minutes

# Overtime display stops growing at 59:59
OVERTIME_CAP_SECS = 3599


class Phase(Enum):
    """The two interval types of a Pomodoro cycle."""
    WORK = "work"
    BREAK = "break"

    @property
    def duration_secs(self) -> int:
        """Fixed nominal length of this phase."""
        if self is Phase.WORK:
            return WORK_DURATION_SECS
        return BREAK_DURATION_SECS

    @property
    def ready_status(self) -> "Status":
        """Idle status waiting for this phase to be started."""
        if self is Phase.WORK:
            return Status.WORK_READY
        return Status.BREAK_READY


class Status(Enum):
    """Operational sub-state of the timer within a phase."""
    WORK_READY = "workReady"
    BREAK_READY = "breakReady"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


_STATE_LABELS = {
    (Phase.WORK, Status.WORK_READY): "Ready to work",
    (Phase.BREAK, Status.BREAK_READY): "Ready to break",
    (Phase.WORK, Status.RUNNING): "Working",
    (Phase.BREAK, Status.RUNNING): "Break time",
    (Phase.WORK, Status.PAUSED): "Paused (work)",
    (Phase.BREAK, Status.PAUSED): "Paused (break)",
    (Phase.WORK, Status.COMPLETE): "Work completed",
    (Phase.BREAK, Status.COMPLETE): "Break completed",
}


def state_label(phase: Phase, status: Status) -> str:
    """Human-readable label for a phase/status pair."""
    return _STATE_LABELS[(phase, status)]


def format_clock(seconds: int) -> str:
    """Format a number of seconds as MM:SS."""
    minutes = seconds // 60
    secs = seconds % 60
    return f"{minutes:02d}:{secs:02d}"


@dataclass(frozen=True)
class TimerState:
    """
    Immutable snapshot of the timer, derived on demand.
    Passed from the core to the shell and serialized for display.
    """
    phase: Phase
    status: Status
    remaining_secs: int
    duration_secs: int
    completion_flag: bool
    state_label: str
    overtime_secs: Optional[int] = None

    @property
    def elapsed_secs(self) -> int:
        """Seconds consumed of the current interval."""
        return self.duration_secs - self.remaining_secs

    @property
    def progress_percentage(self) -> float:
        """Return progress as percentage (0-100)."""
        if self.duration_secs == 0:
            return 0.0
        return (self.elapsed_secs / self.duration_secs) * 100.0

    def format_remaining(self) -> str:
        """Format remaining time as MM:SS."""
        return format_clock(self.remaining_secs)

    def format_overtime(self) -> str:
        """Format overtime as +MM:SS, or an empty string when not complete."""
        if self.overtime_secs is None:
            return ""
        return "+" + format_clock(self.overtime_secs)

    def to_dict(self) -> Dict[str, Any]:
        """
        Wire form of the snapshot.
        Keys are camelCase; overtimeSecs is omitted when absent.
        """
        data: Dict[str, Any] = {
            "phase": self.phase.value,
            "status": self.status.value,
            "remainingSecs": self.remaining_secs,
            "durationSecs": self.duration_secs,
            "completionFlag": self.completion_flag,
            "stateLabel": self.state_label,
        }
        if self.overtime_secs is not None:
            data["overtimeSecs"] = self.overtime_secs
        return data


@dataclass
class AppSettings:
    """Application settings, built from the command line at startup."""
    sound_enabled: bool = True
    notification_enabled: bool = True
    poll_interval_ms: int = 1000
    log_level: str = "WARNING"
    lock_timeout_secs: float = 1.0

    def __post_init__(self):
        """Validate settings data."""
        if self.poll_interval_ms < 100:
            self.poll_interval_ms = 100
        if self.lock_timeout_secs <= 0:
            self.lock_timeout_secs = 1.0
        self.log_level = self.log_level.upper()
