from __future__ import annotations

import math
from datetime import datetime


def elapsed_minutes(time_in: datetime, now: datetime) -> int:
    """Whole minutes since time_in (floor; negative when time_in is in the future)."""
    return math.floor((now - time_in).total_seconds() / 60)


def duration_label(time_in: datetime, now: datetime) -> str:
    """Human label for how long an active visit has lasted so far."""
    minutes = elapsed_minutes(time_in, now)

    if minutes < 1:
        return "Just arrived"
    if minutes == 1:
        return "1 minute"
    if minutes < 60:
        return f"{minutes} minutes"

    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


def duration_minutes(time_in: datetime, time_out: datetime) -> int:
    """Length of a finished visit in minutes, rounded half up.

    Always non-negative: a checkout recorded before the check-in (clock
    skew, mistyped time) yields the same value as the reverse order.
    """
    minutes = abs((time_out - time_in).total_seconds()) / 60
    return int(math.floor(minutes + 0.5))
