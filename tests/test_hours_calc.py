"""Tests for hours_calc.py."""
import math

import pytest

from hours_calc import EventType, Phase, calculate_hours, parse_duration, phase_requires_type


@pytest.mark.parametrize(
    "phase, type_, duration, expected",
    [
        ("RUN", "", "3", 3.0),
        ("RUN", "", "1.5", 1.5),
        ("RUN", "", "", 0.0),
        ("RUN", "", None, 0.0),
        ("RUN", "", "abc", 0.0),
        ("RESET", "", "100", 0.5),
        ("TEARDOWN", "", "7", 2.0),
        ("TEARDOWN", "NEW", None, 2.0),
        ("PLANNING", "NEW", "", 4.5),
        ("PLANNING", "EXISTING", "", 3.0),
        ("SETUP", "FIRST", "", 2.0),
        ("SETUP", "PROCEEDING", "", 0.0),
        ("PLANNING", "", "", 0.0),
        ("PLANNING", "FIRST", "", 0.0),
        ("SETUP", "NEW", "", 0.0),
        ("", "", "", 0.0),
        ("BOGUS", "NEW", "5", 0.0),
    ],
)
def test_calculate_hours(phase, type_, duration, expected):
    assert calculate_hours(phase, type_, duration) == expected


def test_accepts_enum_members():
    assert calculate_hours(Phase.PLANNING, EventType.NEW) == 4.5
    assert calculate_hours(Phase.RUN, None, 2) == 2.0


def test_lowercase_strings_are_accepted():
    assert calculate_hours("setup", "first") == 2.0


@pytest.mark.parametrize("duration", ["-3", "nan", "inf", "-inf", object(), True])
def test_run_hours_are_finite_and_non_negative(duration):
    hours = calculate_hours("RUN", None, duration)
    assert math.isfinite(hours)
    assert hours == 0.0


def test_parse_duration_strips_whitespace():
    assert parse_duration(" 2.5 ") == 2.5


def test_phase_requires_type():
    assert phase_requires_type("PLANNING")
    assert phase_requires_type(Phase.SETUP)
    assert not phase_requires_type("RUN")
    assert not phase_requires_type("")
