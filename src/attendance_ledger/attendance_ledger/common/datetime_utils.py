from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE


def parse_iso_datetime(value: str) -> datetime:
    """Parse the value of an HTML datetime-local input (YYYY-MM-DDTHH:MM)."""
    return datetime.fromisoformat(value.strip())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_date_only(value: datetime, *, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Render the calendar date of a meeting, e.g. '17 Oct 2026'.

    Naive datetimes are already local to the community and are not shifted.
    """
    if value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(tz_name))
    return f"{value.day} {value.strftime('%b %Y')}"


def days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 86400
