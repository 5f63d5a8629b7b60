import pytest

pytest.importorskip("PySide6.QtCore")

from core.errors import LockUnavailableError  # noqa: E402
from core.models import Status  # noqa: E402
from core.timer_poller import TimerPoller  # noqa: E402


@pytest.fixture
def poller(qapp, service):
    return TimerPoller(service, interval_ms=1000)


@pytest.fixture
def recorder(poller):
    events = {"state": [], "completed": [], "failed": []}
    poller.state_updated.connect(lambda s: events["state"].append(s))
    poller.completed.connect(lambda s: events["completed"].append(s))
    poller.failed.connect(lambda m: events["failed"].append(m))
    return events


def test_poll_publishes_state(poller, recorder):
    state = poller.poll()

    assert state.status == Status.WORK_READY
    assert recorder["state"] == [state]
    assert poller.last_state == state
    assert recorder["completed"] == []


def test_completion_signal_fires_once(poller, recorder, service, clock):
    service.start()
    poller.poll()
    clock.advance(1501)

    poller.poll()
    clock.advance(1)
    poller.poll()
    poller.poll()

    assert len(recorder["completed"]) == 1
    assert recorder["completed"][0].status == Status.COMPLETE
    assert len(recorder["state"]) == 4


def test_completion_signal_rearms_after_restart(poller, recorder, service, clock):
    service.start()
    clock.advance(1501)
    poller.poll()

    poller.publish(service.start())
    clock.advance(1501)
    poller.poll()

    assert len(recorder["completed"]) == 2


def test_poll_failure_emits_failed(poller, recorder, service):
    def unavailable():
        raise LockUnavailableError("Timer lock poisoned by an earlier failure")

    service.get_state = unavailable

    assert poller.poll() is None
    assert recorder["failed"] == ["Timer lock poisoned by an earlier failure"]
    assert recorder["state"] == []


def test_start_and_stop(poller, recorder):
    poller.start()
    assert poller.is_active
    assert len(recorder["state"]) == 1

    poller.stop()
    assert not poller.is_active
