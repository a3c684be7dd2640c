from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from zen_den.visits.duration import duration_label, duration_minutes

T0 = datetime(2026, 10, 14, 9, 0, 0)


@pytest.mark.parametrize(
    "elapsed, expected",
    [
        (timedelta(seconds=0), "Just arrived"),
        (timedelta(seconds=59), "Just arrived"),
        (timedelta(seconds=60), "1 minute"),
        (timedelta(seconds=119), "1 minute"),
        (timedelta(minutes=2), "2 minutes"),
        (timedelta(minutes=15), "15 minutes"),
        (timedelta(minutes=59, seconds=59), "59 minutes"),
        (timedelta(hours=1), "1h 0m"),
        (timedelta(minutes=65), "1h 5m"),
        (timedelta(hours=3, minutes=7), "3h 7m"),
    ],
)
def test_duration_label_boundaries(elapsed, expected):
    assert duration_label(T0, T0 + elapsed) == expected


def test_duration_label_future_time_in_reads_just_arrived():
    assert duration_label(T0, T0 - timedelta(minutes=5)) == "Just arrived"


def test_duration_minutes_rounds_to_nearest():
    assert duration_minutes(T0, T0 + timedelta(minutes=70)) == 70
    assert duration_minutes(T0, T0 + timedelta(minutes=10, seconds=29)) == 10
    assert duration_minutes(T0, T0 + timedelta(minutes=10, seconds=30)) == 11


@pytest.mark.parametrize("seconds", [0, 29, 30, 90, 150, 4201, 86400])
def test_duration_minutes_is_symmetric(seconds):
    later = T0 + timedelta(seconds=seconds)
    assert duration_minutes(T0, later) == duration_minutes(later, T0)
    assert duration_minutes(later, T0) >= 0
