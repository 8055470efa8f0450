"""The single timestamp edit session and the controller that owns it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Callable

from ..core.model import DURATIONS, Repeater, TemporalValue, TimestampTarget
from ..core.utils import current_time

logger = logging.getLogger(__name__)

DEFAULT_REPEATER = Repeater(num=1, duration="d", kind=".+")


class SessionClosed(RuntimeError):
    """Raised when a field update arrives while no session is open."""


@dataclass
class TimestampSession:
    timestamp: TemporalValue = field(default_factory=TemporalValue)
    show_time: bool = False
    show_repeater: bool = False
    target: TimestampTarget | None = None
    is_open: bool = False

    @property
    def date(self) -> date | None:
        return self.timestamp.date

    @property
    def time_visible(self) -> bool:
        return self.show_time or bool((self.timestamp.time or "").strip())

    @property
    def repeater_visible(self) -> bool:
        return self.show_repeater or self.timestamp.repeater.complete


Listener = Callable[[TimestampSession], None]


class TimestampController:
    """
    Owns the one timestamp session of the process.
    
    All changes go through this object; subscribers are called with the
    session after each change. Opening a session while another is open resets
    the previous one first.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._session = TimestampSession()
        self._listeners: list[Listener] = []
        self._clock = clock or datetime.now

    @property
    def session(self) -> TimestampSession:
        return self._session

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)

    def require_open(self) -> TimestampSession:
        if not self._session.is_open:
            raise SessionClosed("No timestamp session is open")
        return self._session

    def _update(self, **changes: Any) -> None:
        session = self.require_open()
        session.timestamp = replace(session.timestamp, **changes)
        self._notify()

    # Lifecycle

    def open(
        self,
        target: TimestampTarget,
        existing: TemporalValue | None = None,
        today: date | None = None,
    ) -> TimestampSession:
        if self._session.is_open:
            logger.debug("Resetting open session for %r before reopening", self._session.target)
        self.reset(notify=False)
        today = today or self._clock().date()
        ts = existing or TemporalValue()
        self._session = TimestampSession(
            timestamp=TemporalValue(
                time=ts.time or None,
                repeater=ts.repeater,
                date=ts.date or today,
            ),
            target=target,
            is_open=True,
        )
        logger.debug("Opened timestamp session for %r", target)
        self._notify()
        return self._session

    def reset(self, notify: bool = True) -> None:
        self._session = TimestampSession()
        if notify:
            self._notify()

    def cancel(self) -> None:
        logger.debug("Cancelled timestamp session for %r", self._session.target)
        self.reset()

    # Date

    def set_date(self, day: date) -> None:
        self._update(date=day)

    # Time

    def show_time_input(self) -> None:
        session = self.require_open()
        session.show_time = True
        self._update(time=current_time(self._clock()))

    def set_time(self, value: str) -> None:
        self._update(time=value)

    def clear_time(self) -> None:
        session = self.require_open()
        session.show_time = False
        self._update(time=None)

    # Repeater

    def show_repeater_input(self) -> None:
        session = self.require_open()
        session.show_repeater = True
        self._update(repeater=DEFAULT_REPEATER)

    def set_repeater_num(self, num: Any) -> None:
        session = self.require_open()
        self._update(repeater=replace(session.timestamp.repeater, num=num))

    def set_repeater_duration(self, duration: str) -> None:
        if duration not in DURATIONS:
            raise ValueError(f"Unknown repeater duration: {duration!r}")
        session = self.require_open()
        self._update(repeater=replace(session.timestamp.repeater, duration=duration))

    def clear_repeater(self) -> None:
        session = self.require_open()
        session.show_repeater = False
        self._update(repeater=Repeater())
