"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Repo root holds the flat modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from data_store import EventForm, EventStore, TrackerState  # noqa: E402


@pytest.fixture
def tracker():
    return TrackerState()


@pytest.fixture
def store():
    return EventStore()


@pytest.fixture
def make_form():
    """Factory for valid forms; override any field by keyword."""

    def _make(**overrides):
        values = {
            "date": "2024-01-15",
            "scenario": "Cookie",
            "phase": "TEARDOWN",
            "staff": "Ashley",
        }
        values.update(overrides)
        return EventForm.from_mapping(values)

    return _make


@pytest.fixture
def sample_events(tracker, make_form):
    """Three events worth 4.5, 3 and 0.5 hours, added oldest first."""
    tracker.submit(make_form(scenario="Cookie", phase="PLANNING", type="NEW", date="2024-01-15"))
    tracker.submit(make_form(scenario="Sepsis", phase="PLANNING", type="EXISTING", date="2024-02-03"))
    tracker.submit(make_form(scenario="Cookie", phase="RESET", date="2024-01-20"))
    return tracker.store.list()
