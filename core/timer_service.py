"""
Shared timer service for the Pomodoro Timer application.
Guards the single TimerEngine with a lock and exposes it as named commands
for the desktop shell.
"""

import inspect
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Union

from .errors import (
    InvalidArgumentsError,
    InvalidPhaseNameError,
    LockUnavailableError,
    TimerError,
    UnknownCommandError,
)
from .models import Phase, TimerState
from .timer_engine import TimerEngine


logger = logging.getLogger(__name__)


def parse_phase(name: Union[str, Phase]) -> Phase:
    """
    Validate an external phase name.

    Args:
        name: "work" or "break" in any letter case, or a Phase.

    Raises:
        InvalidPhaseNameError: For anything else.
    """
    if isinstance(name, Phase):
        return name
    if isinstance(name, str):
        normalized = name.lower()
        for phase in Phase:
            if phase.value == normalized:
                return phase
    raise InvalidPhaseNameError()


class TimerService:
    """
    Lock-guarded access to the process-wide timer.

    Created once by the startup routine and handed to every component
    that issues commands. Each command holds the lock for its whole
    duration. If a command fails with anything other than a TimerError
    the service is poisoned and all later commands are rejected with
    LockUnavailableError.
    """

    # Command names understood by invoke()
    COMMANDS = (
        "get_state",
        "start_timer",
        "pause_timer",
        "resume_timer",
        "clear_timer",
        "set_phase",
    )

    def __init__(
        self,
        engine: Optional[TimerEngine] = None,
        lock_timeout_secs: float = 1.0
    ):
        """
        Initialize the service.

        Args:
            engine: Timer engine to guard. A fresh one is created if None.
            lock_timeout_secs: How long a command waits for the lock
                before failing.
        """
        self._engine = engine if engine is not None else TimerEngine()
        self._lock = threading.Lock()
        self._lock_timeout_secs = lock_timeout_secs
        self._poisoned = False

        self._handlers: Dict[str, Callable[..., TimerState]] = {
            "get_state": self.get_state,
            "start_timer": self.start,
            "pause_timer": self.pause,
            "resume_timer": self.resume,
            "clear_timer": self.clear,
            "set_phase": self.set_phase,
        }

    @property
    def is_poisoned(self) -> bool:
        """Check if an earlier command left the timer in an unknown state."""
        return self._poisoned

    @contextmanager
    def _locked(self) -> Iterator[TimerEngine]:
        """Hold the timer lock for the duration of one command."""
        if not self._lock.acquire(timeout=self._lock_timeout_secs):
            raise LockUnavailableError(
                f"Timer lock not acquired within {self._lock_timeout_secs:g}s"
            )
        try:
            if self._poisoned:
                raise LockUnavailableError(
                    "Timer lock poisoned by an earlier failure"
                )
            try:
                yield self._engine
            except TimerError:
                raise
            except Exception:
                self._poisoned = True
                logger.exception("Timer command failed unexpectedly; lock poisoned")
                raise
        finally:
            self._lock.release()

    def get_state(self) -> TimerState:
        with self._locked() as engine:
            return engine.get_state()

    def start(self) -> TimerState:
        with self._locked() as engine:
            return engine.start()

    def pause(self) -> TimerState:
        with self._locked() as engine:
            return engine.pause()

    def resume(self) -> TimerState:
        with self._locked() as engine:
            return engine.resume()

    def clear(self) -> TimerState:
        with self._locked() as engine:
            return engine.clear()

    def set_phase(self, phase: Union[str, Phase]) -> TimerState:
        """Switch phase. Phase names are validated before the lock is taken."""
        new_phase = parse_phase(phase)
        with self._locked() as engine:
            return engine.set_phase(new_phase)

    def invoke(self, command: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Run a command by name and return the wire form of the new state.

        Args:
            command: One of COMMANDS.
            **kwargs: Command arguments (only set_phase takes ``phase``).

        Raises:
            UnknownCommandError: The command name is not known.
            InvalidArgumentsError: Missing or unexpected arguments
                (InvalidPhaseNameError for set_phase).
            TimerError: The command was rejected.
        """
        handler = self._handlers.get(command)
        if handler is None:
            raise UnknownCommandError(f"Unknown command: {command}")

        try:
            inspect.signature(handler).bind(**kwargs)
        except TypeError:
            logger.warning("Command %s rejected: bad arguments %r", command, kwargs)
            if command == "set_phase":
                raise InvalidPhaseNameError() from None
            raise InvalidArgumentsError(
                f"Invalid arguments for {command}: {sorted(kwargs)}"
            ) from None

        try:
            state = handler(**kwargs)
        except TimerError as e:
            logger.warning("Command %s rejected: %s", command, e)
            raise

        logger.debug("Command %s -> %s", command, state.status.value)
        return state.to_dict()


def create_timer_service(lock_timeout_secs: float = 1.0) -> TimerService:
    """Create the shared timer service, starting in the Work phase."""
    return TimerService(TimerEngine(), lock_timeout_secs=lock_timeout_secs)
