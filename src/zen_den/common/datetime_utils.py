from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD).")


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) as sent by a time input."""
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError("Time must be in HH:MM format.")


def combine_date_time(date_value: date, time_value: time) -> datetime:
    return datetime.combine(date_value, time_value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_week(today: date) -> date:
    """Sunday of the week containing ``today``."""
    return today - timedelta(days=(today.weekday() + 1) % 7)


def start_of_month(today: date) -> date:
    return today.replace(day=1)


def format_time_12h(value: datetime) -> str:
    """e.g. ``9:05 AM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_display_date(value: date) -> str:
    """e.g. ``Oct 5, 2026``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"
