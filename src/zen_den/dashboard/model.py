from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.enums import Emotion, GradeLevel, TimeOfDay


@dataclass(frozen=True)
class FrequentVisitor:
    student_name: str
    grade_level: str
    visit_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "student_name": self.student_name,
            "grade_level": self.grade_level,
            "visit_count": self.visit_count,
        }


@dataclass(frozen=True)
class DashboardStats:
    today_count: int
    week_count: int
    month_count: int
    grade_breakdown: dict[str, int]
    emotion_breakdown: dict[str, int]
    time_of_day_breakdown: dict[str, int]
    frequent_visitors: list[FrequentVisitor] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "today_count": self.today_count,
            "week_count": self.week_count,
            "month_count": self.month_count,
            "grade_breakdown": dict(self.grade_breakdown),
            "emotion_breakdown": dict(self.emotion_breakdown),
            "time_of_day_breakdown": dict(self.time_of_day_breakdown),
            "frequent_visitors": [v.to_dict() for v in self.frequent_visitors],
        }


GRADE_LABELS = {g.value: g.label for g in GradeLevel}
EMOTION_LABELS = {e.value: e.value for e in Emotion}
TIME_OF_DAY_LABELS = {t.value: t.label for t in TimeOfDay}
