"""Root conftest — shared test configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Keep tests independent of a developer's environment or .env file
os.environ.setdefault("CONTENT_CORE_LOG_LEVEL", "INFO")
os.environ.setdefault("CONTENT_CORE_LOG_FORMAT", "json")

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TickingClock:
    """Deterministic clock: each call returns one second later than the last."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()
