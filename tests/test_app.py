import pytest
from streamlit.testing.v1 import AppTest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("TIMEZONE", "LOG_LEVEL", "DEFAULT_DAYS_SHIFT1", "DEFAULT_DAYS_SHIFT2",
                "DEFAULT_HOURS_SHIFT1", "DEFAULT_HOURS_SHIFT2"):
        monkeypatch.delenv(key, raising=False)


def _button(at, label):
    return next(button for button in at.button if button.label == label)


def _fill_entry(at, value):
    for text_input in at.text_input:
        if text_input.key and text_input.key.startswith("entry_"):
            text_input.input(value)


@pytest.fixture
def running_app():
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    _button(at, "Start Run").click().run()
    assert not at.exception
    return at


def test_submit_moves_selector_to_next_hour(running_app):
    at = running_app
    assert at.session_state["production_state"].selection == (1, 1, 1)

    _fill_entry(at, "10")
    _button(at, "Log Hour").click().run()

    state = at.session_state["production_state"]
    assert not at.exception
    assert len(state.log) == 1
    assert state.selection == (1, 1, 2)
    assert at.number_input(key="entry_hour").value == 2

    # A plain rerun keeps the advanced cursor
    at.run()
    assert at.session_state["production_state"].selection == (1, 1, 2)


def test_consecutive_submits_log_consecutive_hours(running_app):
    at = running_app

    for quantity in ("10", "20"):
        _fill_entry(at, quantity)
        _button(at, "Log Hour").click().run()

    state = at.session_state["production_state"]
    assert state.log.is_logged(1, 1, 1)
    assert state.log.is_logged(1, 1, 2)
    assert state.log.quantity(1, 1, 2, "1") == 20
    assert state.selection == (1, 1, 3)
