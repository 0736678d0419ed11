"""Shared fixtures."""

import pytest


class FakeClock:
    """Manually driven monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Fake clock starting at zero."""
    return FakeClock()
