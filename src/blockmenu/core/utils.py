"""Utility functions for blockmenu."""

import re
import uuid
from datetime import date, datetime

TIME_FORMAT = "%H:%M"

# English names, independent of LC_TIME
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_TOKEN_RE = re.compile(r"yyyy|MMMM|MMM|MM|EEEE|EEE|do|dd|d|'[^']*'")


def parse_uuid(value: str | None) -> str | None:
    """
    Parse a block identifier attribute.
    
    Returns the canonical lowercase UUID string, or None when the value is
    missing or not a UUID.
    
    Examples:
        >>> parse_uuid("6566F0B4-8D2A-4B0B-9C8B-2F0E6C1D9A10")
        '6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a10'
        >>> parse_uuid("not-a-uuid") is None
        True
    """
    if not value:
        return None
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError:
        return None


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def weekday_abbr(day: date) -> str:
    return WEEKDAYS[day.weekday()][:3]


def journal_title(day: date, fmt: str = "MMM do, yyyy") -> str:
    """
    Render the journal page name for a calendar date.
    
    Supports the date tokens used by journal title formats:
    yyyy, MMMM, MMM, MM, EEEE, EEE, do, dd, d and 'quoted' literals.
    
    Examples:
        >>> journal_title(date(2024, 3, 5))
        'Mar 5th, 2024'
        >>> journal_title(date(2024, 3, 5), "yyyy-MM-dd")
        '2024-03-05'
    """
    def render(m: re.Match) -> str:
        tok = m.group(0)
        if tok.startswith("'"):
            return tok[1:-1]
        if tok == "yyyy":
            return f"{day.year:04d}"
        if tok == "MMMM":
            return MONTHS[day.month - 1]
        if tok == "MMM":
            return MONTHS[day.month - 1][:3]
        if tok == "MM":
            return f"{day.month:02d}"
        if tok == "EEEE":
            return WEEKDAYS[day.weekday()]
        if tok == "EEE":
            return weekday_abbr(day)
        if tok == "do":
            return ordinal(day.day)
        if tok == "dd":
            return f"{day.day:02d}"
        return str(day.day)

    return _TOKEN_RE.sub(render, fmt)


def current_time(now: datetime | None = None) -> str:
    """Local clock time as HH:mm."""
    return (now or datetime.now()).strftime(TIME_FORMAT)
