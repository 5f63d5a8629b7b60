import os

import pytest

from core.timer_engine import TimerEngine
from core.timer_service import TimerService

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    return TimerEngine(clock=clock)


@pytest.fixture
def service(engine):
    return TimerService(engine, lock_timeout_secs=0.05)


@pytest.fixture
def qapp():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app
