"""
Shared test fixtures for Duration Reporter tests.

Provides a deterministic fake clock so durations and percentages can be
asserted exactly, a fresh reporter per test, and a TestClient bound to a
freshly configured global reporter.
"""

import pytest
from fastapi.testclient import TestClient

from duration_reporter.main import create_app
from duration_reporter.reporter import (
    DurationReporter,
    FamilyMatch,
    reset_duration_reporter,
    setup_duration_reporting,
)
from duration_reporter.units import MILLISECOND

MS = 1_000_000  # nanoseconds per millisecond


class FakeClock:
    """Monotonic nanosecond clock advanced by hand."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance_ms(self, ms: int) -> None:
        self.now += ms * MS


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def reporter(clock):
    """A reporter with millisecond unit, exact family matching and the fake clock."""
    return DurationReporter(
        time_unit=MILLISECOND,
        family_match=FamilyMatch.EXACT,
        strict=False,
        clock=clock,
    )


@pytest.fixture
def global_reporter(clock):
    """Configure the process-wide reporter and drop it afterwards."""
    reporter = setup_duration_reporting(
        time_unit=MILLISECOND,
        family_match=FamilyMatch.EXACT,
        strict=False,
        clock=clock,
    )
    yield reporter
    reset_duration_reporter()


@pytest.fixture
def client(global_reporter):
    """TestClient against the app, backed by the configured global reporter."""
    with TestClient(create_app(), raise_server_exceptions=False) as c:
        yield c
