import pytest

from core.models import (
    AppSettings,
    Phase,
    Status,
    TimerState,
    format_clock,
    state_label,
)


def make_state(**overrides):
    fields = dict(
        phase=Phase.WORK,
        status=Status.RUNNING,
        remaining_secs=1200,
        duration_secs=1500,
        completion_flag=False,
        state_label="Working",
    )
    fields.update(overrides)
    return TimerState(**fields)


def test_phase_durations():
    assert Phase.WORK.duration_secs == 1500
    assert Phase.BREAK.duration_secs == 300


def test_phase_ready_status():
    assert Phase.WORK.ready_status == Status.WORK_READY
    assert Phase.BREAK.ready_status == Status.BREAK_READY


@pytest.mark.parametrize("phase, status, label", [
    (Phase.WORK, Status.WORK_READY, "Ready to work"),
    (Phase.BREAK, Status.BREAK_READY, "Ready to break"),
    (Phase.WORK, Status.RUNNING, "Working"),
    (Phase.BREAK, Status.RUNNING, "Break time"),
    (Phase.WORK, Status.PAUSED, "Paused (work)"),
    (Phase.BREAK, Status.PAUSED, "Paused (break)"),
    (Phase.WORK, Status.COMPLETE, "Work completed"),
    (Phase.BREAK, Status.COMPLETE, "Break completed"),
])
def test_state_labels(phase, status, label):
    assert state_label(phase, status) == label


def test_to_dict_uses_camel_case_and_omits_overtime():
    data = make_state().to_dict()

    assert data == {
        "phase": "work",
        "status": "running",
        "remainingSecs": 1200,
        "durationSecs": 1500,
        "completionFlag": False,
        "stateLabel": "Working",
    }


def test_to_dict_includes_overtime_when_complete():
    state = make_state(
        status=Status.COMPLETE,
        remaining_secs=0,
        completion_flag=True,
        state_label="Work completed",
        overtime_secs=0,
    )

    data = state.to_dict()
    assert data["status"] == "complete"
    assert data["overtimeSecs"] == 0


def test_status_wire_values():
    assert [s.value for s in Status] == [
        "workReady", "breakReady", "running", "paused", "complete",
    ]


def test_formatting():
    assert format_clock(0) == "00:00"
    assert format_clock(1500) == "25:00"
    assert format_clock(3599) == "59:59"

    state = make_state(remaining_secs=61)
    assert state.format_remaining() == "01:01"
    assert state.format_overtime() == ""
    assert make_state(overtime_secs=75).format_overtime() == "+01:15"


def test_progress():
    state = make_state(remaining_secs=1125)
    assert state.elapsed_secs == 375
    assert state.progress_percentage == pytest.approx(25.0)


def test_snapshot_is_immutable():
    state = make_state()
    with pytest.raises(AttributeError):
        state.remaining_secs = 5


def test_app_settings_validation():
    settings = AppSettings(poll_interval_ms=10, lock_timeout_secs=0, log_level="info")

    assert settings.poll_interval_ms == 100
    assert settings.lock_timeout_secs == 1.0
    assert settings.log_level == "INFO"
