"""Headless smoke tests for app.py."""
from datetime import date
from pathlib import Path

import pytest

AppTest = pytest.importorskip("streamlit.testing.v1").AppTest

APP = str(Path(__file__).parent.parent / "app.py")


@pytest.fixture
def at():
    app = AppTest.from_file(APP, default_timeout=30)
    app.run()
    return app


def test_app_starts_empty(at):
    assert not at.exception
    assert at.title[0].value == "Simulation Lab Hours Calculator"
    assert len(at.session_state["tracker"].store) == 0


def test_add_event(at):
    at.date_input(key="form_date").set_value(date(2024, 1, 15))
    at.text_input(key="form_scenario").input("Cookie")
    at.selectbox(key="form_phase").select("TEARDOWN")
    at.run()
    at.button(key="add_event").click()
    at.run()

    assert not at.exception
    events = at.session_state["tracker"].store.list()
    assert len(events) == 1
    assert events[0].hours == 2.0
    # form reset after a successful add
    assert at.text_input(key="form_scenario").value == ""


def test_missing_fields_show_error(at):
    at.button(key="add_event").click()
    at.run()

    assert not at.exception
    assert len(at.session_state["tracker"].store) == 0
    assert "Scenario, Phase, and Date" in at.error[0].value


def test_delete_asks_for_confirmation(at):
    at.date_input(key="form_date").set_value(date(2024, 1, 15))
    at.text_input(key="form_scenario").input("Cookie")
    at.selectbox(key="form_phase").select("RESET")
    at.run()
    at.button(key="add_event").click()
    at.run()

    at.button(key="request_delete").click()
    at.run()
    assert not at.exception
    assert len(at.session_state["tracker"].store) == 1
    assert any("Delete this event?" in w.value for w in at.warning)

    at.button(key="confirm_delete").click()
    at.run()
    assert not at.exception
    assert len(at.session_state["tracker"].store) == 0
