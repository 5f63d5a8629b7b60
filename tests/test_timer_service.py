import threading

import pytest

from core.errors import (
    AlreadyRunningError,
    InvalidArgumentsError,
    InvalidPhaseNameError,
    LockUnavailableError,
    NotPausedError,
    UnknownCommandError,
)
from core.models import Phase, Status
from core.timer_service import TimerService, create_timer_service, parse_phase


@pytest.mark.parametrize("name, expected", [
    ("work", Phase.WORK),
    ("WORK", Phase.WORK),
    ("Break", Phase.BREAK),
    (Phase.BREAK, Phase.BREAK),
])
def test_parse_phase_accepts_known_names(name, expected):
    assert parse_phase(name) == expected


@pytest.mark.parametrize("name", [
    "", "rest", "works", " break ", "work\n", "\twork", None, 1,
])
def test_parse_phase_rejects_everything_else(name):
    with pytest.raises(InvalidPhaseNameError, match="Invalid phase. Use 'work' or 'break'."):
        parse_phase(name)


def test_commands_return_snapshots(service, clock):
    assert service.get_state().status == Status.WORK_READY

    assert service.start().status == Status.RUNNING
    clock.advance(300)
    paused = service.pause()
    assert (paused.status, paused.remaining_secs) == (Status.PAUSED, 1200)

    resumed = service.resume()
    assert resumed.status == Status.RUNNING
    clock.advance(1)
    assert service.get_state().remaining_secs == 1199

    assert service.clear().status == Status.WORK_READY


def test_set_phase_by_name(service, clock):
    service.start()
    clock.advance(300)

    state = service.set_phase("Break")
    assert (state.phase, state.status, state.remaining_secs) == (
        Phase.BREAK, Status.BREAK_READY, 300
    )

    state = service.set_phase("work")
    assert (state.phase, state.status, state.remaining_secs) == (
        Phase.WORK, Status.PAUSED, 1200
    )


def test_invalid_phase_never_reaches_engine(service, engine):
    engine.set_phase = None  # would blow up if reached

    with pytest.raises(InvalidPhaseNameError):
        service.set_phase("lunch")
    assert not service.is_poisoned


def test_rejections_do_not_poison(service):
    service.start()
    with pytest.raises(AlreadyRunningError):
        service.start()
    with pytest.raises(NotPausedError):
        service.resume()

    assert not service.is_poisoned
    assert service.get_state().status == Status.RUNNING


def test_invoke_returns_wire_dict(service):
    data = service.invoke("start_timer")
    assert data["status"] == "workReady"
    assert data["remainingSecs"] == 1500
    assert "overtimeSecs" not in data

    data = service.invoke("set_phase", phase="BREAK")
    assert data["phase"] == "break"
    assert data["status"] == "breakReady"


def test_invoke_every_command(service):
    expected_keys = {
        "phase", "status", "remainingSecs", "durationSecs",
        "completionFlag", "stateLabel",
    }
    for command in TimerService.COMMANDS:
        kwargs = {"phase": "work"} if command == "set_phase" else {}
        data = service.invoke(command, **kwargs)
        assert set(data) == expected_keys

    assert data["status"] == "workReady"


def test_invoke_set_phase_without_phase_is_rejected(service):
    with pytest.raises(InvalidPhaseNameError):
        service.invoke("set_phase")
    with pytest.raises(InvalidPhaseNameError):
        service.invoke("set_phase", name="work")

    assert not service.is_poisoned
    assert service.get_state().phase == Phase.WORK


def test_invoke_unexpected_arguments_are_rejected(service):
    with pytest.raises(InvalidArgumentsError, match="start_timer"):
        service.invoke("start_timer", phase="work")

    assert not service.is_poisoned
    assert service.get_state().status == Status.WORK_READY


def test_invoke_unknown_command(service):
    with pytest.raises(UnknownCommandError, match="Unknown command: reset_timer"):
        service.invoke("reset_timer")


def test_invoke_propagates_rejections(service):
    with pytest.raises(NotPausedError, match="No paused timer to resume"):
        service.invoke("resume_timer")


def test_unexpected_failure_poisons_lock(service, engine):
    def broken():
        raise ZeroDivisionError("boom")

    engine.get_state = broken
    with pytest.raises(ZeroDivisionError):
        service.get_state()

    assert service.is_poisoned
    with pytest.raises(LockUnavailableError, match="poisoned"):
        service.start()
    with pytest.raises(LockUnavailableError):
        service.invoke("clear_timer")


def test_lock_timeout_is_reported(service):
    held = threading.Event()
    release = threading.Event()

    def hold_lock():
        with service._locked():
            held.set()
            release.wait(5)

    worker = threading.Thread(target=hold_lock)
    worker.start()
    try:
        assert held.wait(5)
        with pytest.raises(LockUnavailableError, match="not acquired"):
            service.get_state()
    finally:
        release.set()
        worker.join(5)

    # Lock is usable again once released
    assert service.get_state().status == Status.WORK_READY
    assert not service.is_poisoned


def test_concurrent_commands_are_serialized():
    service = create_timer_service(lock_timeout_secs=5)
    results = []
    errors = []

    def try_start():
        try:
            results.append(service.start())
        except AlreadyRunningError as e:
            errors.append(e)

    threads = [threading.Thread(target=try_start) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)

    assert len(results) == 1
    assert len(errors) == 7
    assert service.get_state().status == Status.RUNNING


def test_create_timer_service_starts_ready_to_work():
    state = create_timer_service().get_state()
    assert (state.phase, state.status, state.remaining_secs) == (
        Phase.WORK, Status.WORK_READY, 1500
    )
