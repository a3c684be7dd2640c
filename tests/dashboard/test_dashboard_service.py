from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from zen_den.core.exceptions import StoreError
from zen_den.dashboard.service import DashboardService

from fakes import InMemoryVisits, make_visit


def _at(day: date, hour: int = 9) -> datetime:
    return datetime(day.year, day.month, day.day, hour, 0)


@pytest.fixture
def repo(fixed_now) -> InMemoryVisits:
    today = fixed_now.date()  # Wed 2026-10-14
    return InMemoryVisits(
        [
            make_visit("Sam", grade="5", time_in=_at(today), emotion="Sad"),
            make_visit("Sam", grade="5", time_in=_at(today - timedelta(days=2), 13), emotion="Sad"),
            make_visit("Sam", grade="5", time_in=_at(today - timedelta(days=10)), emotion="Angry"),
            make_visit("Lee", grade="2", time_in=_at(today - timedelta(days=3), 14), emotion="Tired"),
            make_visit("Lee", grade="2", time_in=_at(today - timedelta(days=20)), emotion="Other"),
            # Outside the 30-day window
            make_visit("Sam", grade="5", time_in=_at(today - timedelta(days=45))),
        ]
    )


def test_counts_are_relative_to_today(repo, fixed_now):
    svc = DashboardService(repo, clock=lambda: fixed_now)

    assert svc.today_count() == 1
    # Sunday 2026-10-11 onwards
    assert svc.week_count() == 3
    # October 1st onwards
    assert svc.month_count() == 4


def test_week_starts_on_sunday(fixed_now):
    sunday = date(2026, 10, 11)
    saturday = date(2026, 10, 10)
    repo = InMemoryVisits([make_visit(time_in=_at(sunday)), make_visit(time_in=_at(saturday))])

    assert DashboardService(repo).week_count(today=fixed_now.date()) == 1
    assert DashboardService(repo).week_count(today=sunday) == 1


def test_get_stats_combines_all_seven(repo, fixed_now):
    svc = DashboardService(repo, clock=lambda: fixed_now)

    stats = svc.get_stats(date(2026, 10, 11), date(2026, 10, 14))

    assert (stats.today_count, stats.week_count, stats.month_count) == (1, 3, 4)
    assert stats.grade_breakdown["5"] == 2
    assert stats.grade_breakdown["2"] == 1
    assert sum(stats.grade_breakdown.values()) == 3
    assert stats.emotion_breakdown == {
        "Angry": 0,
        "Sad": 2,
        "Anxious/Worried": 0,
        "Frustrated": 0,
        "Overwhelmed": 0,
        "Tired": 1,
        "Other": 0,
    }
    assert stats.time_of_day_breakdown == {"morning": 1, "afternoon": 2}
    assert [(f.student_name, f.visit_count) for f in stats.frequent_visitors] == [("Sam", 3)]


def test_window_does_not_affect_counts_or_frequent_visitors(repo, fixed_now):
    svc = DashboardService(repo, clock=lambda: fixed_now)

    stats = svc.get_stats(date(2020, 1, 1), date(2020, 1, 31))

    assert sum(stats.grade_breakdown.values()) == 0
    assert stats.time_of_day_breakdown == {"morning": 0, "afternoon": 0}
    assert stats.today_count == 1
    assert stats.frequent_visitors[0].student_name == "Sam"


def test_no_window_uses_all_visits(repo, fixed_now):
    stats = DashboardService(repo, clock=lambda: fixed_now).get_stats()
    assert sum(stats.emotion_breakdown.values()) == 6


def test_frequent_visitor_thresholds_are_configurable(repo, fixed_now):
    svc = DashboardService(repo, frequent_min_visits=2, clock=lambda: fixed_now)

    result = svc.frequent_visitors()

    assert [(f.student_name, f.visit_count) for f in result] == [("Sam", 3), ("Lee", 2)]
    assert svc.frequent_visitors(days=60)[0].visit_count == 4


class FailingStore(InMemoryVisits):
    def count_visits(self, *, start_date=None, end_date=None):
        raise StoreError("connection lost")

    def list_visits(self, filters):
        raise StoreError("connection lost")


def test_store_errors_fall_back_to_defaults(fixed_now):
    stats = DashboardService(FailingStore(), clock=lambda: fixed_now).get_stats()

    assert (stats.today_count, stats.week_count, stats.month_count) == (0, 0, 0)
    assert set(stats.grade_breakdown.values()) == {0}
    assert len(stats.grade_breakdown) == 9
    assert len(stats.emotion_breakdown) == 7
    assert stats.time_of_day_breakdown == {"morning": 0, "afternoon": 0}
    assert stats.frequent_visitors == []


def test_unexpected_errors_fail_the_whole_load(fixed_now):
    class CorruptRows(InMemoryVisits):
        def list_visits(self, filters):
            raise ValueError("bad grade in row")

    with pytest.raises(ValueError):
        DashboardService(CorruptRows(), clock=lambda: fixed_now).get_stats()
