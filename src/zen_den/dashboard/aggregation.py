"""In-memory reductions behind the dashboard.

The store returns at most a few thousand rows per window, so grouping and
counting happen here rather than in SQL.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

from ..core.constants import MORNING_CUTOFF_HOUR
from ..core.enums import Emotion, GradeLevel, TimeOfDay
from ..visits.model import Visit
from .model import FrequentVisitor


def empty_grade_breakdown() -> dict[str, int]:
    return {g.value: 0 for g in GradeLevel}


def empty_emotion_breakdown() -> dict[str, int]:
    return {e.value: 0 for e in Emotion}


def empty_time_of_day_breakdown() -> dict[str, int]:
    return {t.value: 0 for t in TimeOfDay}


def grade_breakdown(visits: Iterable[Visit]) -> dict[str, int]:
    breakdown = empty_grade_breakdown()
    for v in visits:
        breakdown[v.grade_level.value] += 1
    return breakdown


def emotion_breakdown(visits: Iterable[Visit]) -> dict[str, int]:
    breakdown = empty_emotion_breakdown()
    for v in visits:
        breakdown[v.emotion.value] += 1
    return breakdown


def time_of_day_breakdown(visits: Iterable[Visit]) -> dict[str, int]:
    breakdown = empty_time_of_day_breakdown()
    for v in visits:
        slot = TimeOfDay.MORNING if v.time_in.hour < MORNING_CUTOFF_HOUR else TimeOfDay.AFTERNOON
        breakdown[slot.value] += 1
    return breakdown


def frequent_visitors(visits: Iterable[Visit], *, min_visits: int) -> list[FrequentVisitor]:
    """Students (by name and grade) with at least ``min_visits`` visits, most visits first.

    Ties keep the order in which each student first appears in ``visits``.
    """
    counts: Counter[tuple[str, str]] = Counter()
    for v in visits:
        counts[(v.student_name, v.grade_level.value)] += 1

    result = [
        FrequentVisitor(student_name=name, grade_level=grade, visit_count=count)
        for (name, grade), count in counts.items()
        if count >= min_visits
    ]
    result.sort(key=lambda f: f.visit_count, reverse=True)
    return result


def breakdown_rows(data: Mapping[str, int], labels: Mapping[str, str]) -> list[dict]:
    """Bar-chart rows; widths are relative to the largest value (at least 1)."""
    max_value = max([*data.values(), 1])
    return [
        {
            "key": key,
            "label": labels.get(key, key),
            "value": value,
            "percentage": round(value / max_value * 100, 1),
        }
        for key, value in data.items()
    ]
