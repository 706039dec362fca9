"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from fittrack.db.database import StateStore
from fittrack.models import WorkoutState
from fittrack.tracker import Tracker


# Wednesday; the week starts on Monday 2025-01-06
NOW = datetime(2025, 1, 8, 10, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def workout_state():
    """Default lifts, no plan, no completions."""
    return WorkoutState.default()


@pytest.fixture
def store(tmp_path):
    return StateStore(str(tmp_path / "fittrack.db"))


class FakeClock:
    """Settable clock for the tracker."""

    def __init__(self, current: datetime):
        self.current = current

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def tracker(store, clock):
    return Tracker(store, clock=clock)
