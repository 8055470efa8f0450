"""Tests for the timestamp edit session controller."""

from datetime import date, datetime

import pytest

from blockmenu.core.model import Repeater, TemporalValue, TimestampTarget
from blockmenu.timestamp.session import DEFAULT_REPEATER, SessionClosed, TimestampController

NOW = datetime(2024, 3, 5, 8, 15)
BLOCK = "6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a10"
OTHER = "6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a11"


@pytest.fixture
def ctl():
    return TimestampController(clock=lambda: NOW)


def test_open_defaults(ctl):
    """A fresh session has no time, no repeater and today's date."""
    session = ctl.open(TimestampTarget("scheduled", BLOCK))
    assert session.is_open
    assert session.timestamp == TemporalValue(date=date(2024, 3, 5))
    assert session.show_time is False
    assert session.show_repeater is False
    assert session.target == TimestampTarget("scheduled", BLOCK)


def test_open_from_existing(ctl):
    existing = TemporalValue(time="07:00", repeater=Repeater(1, "w", "++"), date=date(2024, 4, 1))
    session = ctl.open(TimestampTarget("deadline", BLOCK), existing=existing)
    assert session.timestamp == existing
    assert session.time_visible
    assert session.repeater_visible


def test_reopen_resets_previous_session(ctl):
    """Nothing from the first session leaks into the second."""
    ctl.open(TimestampTarget("scheduled", BLOCK))
    ctl.show_time_input()
    ctl.show_repeater_input()
    ctl.set_date(date(2030, 1, 1))

    session = ctl.open(TimestampTarget("deadline", OTHER))
    assert session.timestamp == TemporalValue(date=date(2024, 3, 5))
    assert session.show_time is False
    assert session.show_repeater is False
    assert session.target == TimestampTarget("deadline", OTHER)


def test_show_time_input_uses_current_time(ctl):
    ctl.open(TimestampTarget("scheduled", BLOCK))
    ctl.show_time_input()
    assert ctl.session.timestamp.time == "08:15"
    assert ctl.session.time_visible


def test_show_repeater_input_defaults_daily(ctl):
    ctl.open(TimestampTarget("scheduled", BLOCK))
    ctl.show_repeater_input()
    assert ctl.session.timestamp.repeater == DEFAULT_REPEATER
    assert ctl.session.repeater_visible


def test_clearing_one_field_keeps_the_rest(ctl):
    """The x on time or repeater clears only that sub-field."""
    ctl.open(TimestampTarget("scheduled", BLOCK))
    ctl.set_time("10:00")
    ctl.show_repeater_input()
    ctl.set_repeater_num(3)

    ctl.clear_time()
    assert ctl.session.is_open
    assert ctl.session.timestamp.time is None
    assert ctl.session.timestamp.repeater == Repeater(3, "d", ".+")

    ctl.clear_repeater()
    assert ctl.session.is_open
    assert ctl.session.timestamp.repeater == Repeater()
    assert ctl.session.timestamp.date == date(2024, 3, 5)


def test_repeater_fields_edit_independently(ctl):
    ctl.open(TimestampTarget("scheduled", BLOCK))
    ctl.set_repeater_duration("m")
    assert ctl.session.timestamp.repeater == Repeater(duration="m")
    ctl.set_repeater_num("2")
    assert ctl.session.timestamp.repeater == Repeater(num="2", duration="m")


def test_unknown_duration_rejected(ctl):
    ctl.open(TimestampTarget("scheduled", BLOCK))
    with pytest.raises(ValueError):
        ctl.set_repeater_duration("q")


def test_updates_on_closed_session_raise(ctl):
    with pytest.raises(SessionClosed):
        ctl.set_time("10:00")


def test_cancel_closes(ctl):
    ctl.open(TimestampTarget("scheduled", BLOCK))
    ctl.cancel()
    assert not ctl.session.is_open
    assert ctl.session.target is None


def test_listeners_see_every_change(ctl):
    seen = []
    unsubscribe = ctl.subscribe(lambda s: seen.append((s.is_open, s.timestamp.time)))

    ctl.open(TimestampTarget("scheduled", BLOCK))
    ctl.set_time("11:30")
    ctl.cancel()
    unsubscribe()
    ctl.open(TimestampTarget("scheduled", BLOCK))

    assert seen == [(True, None), (True, "11:30"), (False, None)]
