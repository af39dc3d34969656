# Shared fixtures. Qt runs on the offscreen platform; set before pytest-qt
# creates the QApplication.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typebounce.design import reduced_motion  # noqa: E402


class FakeClock:
    """Monotonic clock the test advances by hand (seconds)."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeSubject:
    """Minimal OffsetSubject recording every applied offset."""

    def __init__(self, text="a", line_height=20.0, interval=1.0 / 60.0):
        self._text = text
        self._line_height = line_height
        self._interval = interval
        self.offsets = []

    def text(self):
        return self._text

    def line_height(self):
        return self._line_height

    def refresh_interval(self):
        return self._interval

    def apply_offset(self, value):
        self.offsets.append(value)


@pytest.fixture(autouse=True)
def _reset_reduced_motion():
    reduced_motion.set_reduced_motion(False)
    yield
    reduced_motion.set_reduced_motion(False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def subject():
    return FakeSubject()
