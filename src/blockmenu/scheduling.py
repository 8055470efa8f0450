"""Repeater encoding and the scheduling timestamp text grammar.

A timestamp renders as ``<YYYY-MM-DD Ddd[ HH:mm][ <kind><num><duration>]>``,
e.g. ``<2024-03-05 Tue 09:30 .+2d>``. Inside block content it sits on its own
line behind a ``SCHEDULED:`` or ``DEADLINE:`` marker.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any

from .core.model import COMMANDS, DURATIONS, KINDS, Repeater, TemporalValue
from .core.utils import weekday_abbr

logger = logging.getLogger(__name__)

TIMESTAMP_RE = re.compile(
    r"^<(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?: [A-Za-z]{2,3})?"
    r"(?: (?P<time>\d{1,2}:\d{2}))?"
    r"(?: (?P<kind>\.\+|\+\+)(?P<num>\d+)(?P<duration>[hdwmy]))?>$"
)
TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def derive_kind(duration: str | None) -> str:
    """Weekly repeats shift from today ("++"); every other unit from the scheduled date."""
    return "++" if duration == "w" else ".+"


def _coerce_num(num: Any) -> int | None:
    if num is None or isinstance(num, bool):
        return None
    try:
        value = int(str(num).strip())
    except ValueError:
        return None
    return value if value > 0 else None


def normalize_repeater(repeater: Repeater) -> Repeater:
    """
    Turn an edited repeater into committed state.
    
    A repeater missing its count or unit is dropped; otherwise the kind is
    derived from the unit.
    """
    num = _coerce_num(repeater.num)
    duration = repeater.duration if repeater.duration in DURATIONS else None
    if num is None or duration is None:
        if not repeater.empty:
            logger.debug("Discarding partial repeater %r", repeater)
        return Repeater()
    return Repeater(num=num, duration=duration, kind=derive_kind(duration))


def normalize_time(time: str | None) -> str | None:
    if time is None:
        return None
    m = TIME_RE.match(time.strip())
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def finalize(value: TemporalValue, today: date | None = None) -> TemporalValue:
    """Prepare an edited value for submission."""
    return TemporalValue(
        time=normalize_time(value.time),
        repeater=normalize_repeater(value.repeater),
        date=value.date or today or date.today(),
    )


def repeater_text(repeater: Repeater) -> str:
    if not repeater.complete or repeater.kind not in KINDS:
        return ""
    return f"{repeater.kind}{repeater.num}{repeater.duration}"


def serialize(value: TemporalValue) -> str:
    """
    Render a timestamp value.
    
    Examples:
        >>> serialize(TemporalValue(time="09:30", repeater=Repeater(2, "d", ".+"), date=date(2024, 3, 5)))
        '<2024-03-05 Tue 09:30 .+2d>'
    """
    if value.date is None:
        raise ValueError("timestamp has no date")
    parts = [value.date.isoformat(), weekday_abbr(value.date)]
    if value.time:
        parts.append(value.time)
    rep = repeater_text(value.repeater)
    if rep:
        parts.append(rep)
    return "<" + " ".join(parts) + ">"


def parse_timestamp(text: str) -> TemporalValue | None:
    """
    Read a timestamp back; None for anything that does not match the grammar.
    """
    m = TIMESTAMP_RE.match(text.strip())
    if not m:
        return None
    try:
        day = datetime.strptime(m.group("date"), "%Y-%m-%d").date()
    except ValueError:
        return None
    time = normalize_time(m.group("time")) if m.group("time") else None
    if m.group("time") and time is None:
        return None
    repeater = Repeater()
    if m.group("kind"):
        repeater = Repeater(
            num=int(m.group("num")),
            duration=m.group("duration"),
            kind=m.group("kind"),
        )
        if repeater.num <= 0:
            return None
    return TemporalValue(time=time, repeater=repeater, date=day)


def marker(command: str) -> str:
    command = command.lower()
    if command not in COMMANDS:
        raise ValueError(f"Unknown scheduling command: {command}")
    return command.upper()


def replace_timestamp_marker(content: str, command: str, text: str) -> str:
    """
    Put ``<MARKER>: <text>`` into block content.
    
    An existing line for the same marker is rewritten in place; otherwise the
    line is inserted right after the first line of the block.
    """
    prefix = f"{marker(command)}:"
    new_line = f"{prefix} {text}"
    lines = content.split("\n")
    for i, line in enumerate(lines):
        if line.lstrip().startswith(prefix):
            indent = line[: len(line) - len(line.lstrip())]
            lines[i] = indent + new_line
            return "\n".join(lines)
    if content == "":
        return new_line
    lines.insert(1, new_line)
    return "\n".join(lines)


def find_timestamp(content: str, command: str) -> TemporalValue | None:
    """Timestamp currently attached to content under the given marker."""
    prefix = f"{marker(command)}:"
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith(prefix):
            return parse_timestamp(stripped[len(prefix):])
    return None

