"""
Error types for the Pomodoro Timer application.
Every failure is a rejected request; none of them is fatal to the process.
"""


class TimerError(RuntimeError):
    """Base class for rejected timer commands."""

    default_message = "Timer command failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class AlreadyRunningError(TimerError):
    """start() called while the timer is running."""
    default_message = "Timer already running"


class AlreadyPausedError(TimerError):
    """start() called while paused; resume() must be used instead."""
    default_message = "Timer is paused, use resume instead"


class NotRunningError(TimerError):
    """pause() called while the timer is not running."""
    default_message = "No running timer to pause"


class NotPausedError(TimerError):
    """resume() called while the timer is not paused."""
    default_message = "No paused timer to resume"


class InvalidPhaseNameError(TimerError, ValueError):
    """A phase name other than 'work' or 'break' reached the adapter."""
    default_message = "Invalid phase. Use 'work' or 'break'."


class LockUnavailableError(TimerError):
    """The shared timer lock could not be acquired or is poisoned."""
    default_message = "Timer lock unavailable"


class UnknownCommandError(TimerError):
    """A command name not known to the adapter."""
    default_message = "Unknown command"


class InvalidArgumentsError(TimerError, TypeError):
    """A command was invoked with missing or unexpected arguments."""
    default_message = "Invalid arguments for command"
