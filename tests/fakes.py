"""Test doubles shared across the suite."""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from zen_den.core.enums import Emotion, GradeLevel
from zen_den.visits.model import NewVisit, Visit, VisitFilters


class InMemoryVisits:
    """VisitRepository over a list, mirroring the store's ordering rules."""

    def __init__(self, visits: Optional[list[Visit]] = None):
        self._visits: list[Visit] = list(visits or [])
        self.calls: list[str] = []

    def create_visit(self, new_visit: NewVisit) -> Visit:
        self.calls.append("create_visit")
        visit = Visit(
            visit_id=str(uuid.uuid4()),
            student_name=new_visit.student_name,
            grade_level=new_visit.grade_level,
            staff_name=new_visit.staff_name,
            visit_date=new_visit.visit_date,
            time_in=new_visit.time_in,
            time_out=None,
            reason=new_visit.reason,
            emotion=new_visit.emotion,
        )
        self._visits.append(visit)
        return visit

    def update_time_out(self, *, visit_id: str, time_out: datetime) -> Optional[Visit]:
        self.calls.append("update_time_out")
        for i, v in enumerate(self._visits):
            if v.visit_id == visit_id:
                self._visits[i] = replace(v, time_out=time_out)
                return self._visits[i]
        return None

    def list_active(self):
        self.calls.append("list_active")
        return sorted((v for v in self._visits if v.time_out is None), key=lambda v: v.time_in)

    def list_visits(self, filters: VisitFilters):
        self.calls.append("list_visits")
        rows = [v for v in self._visits if filters.matches(v)]
        rows.sort(key=lambda v: (v.visit_date, v.time_in), reverse=True)
        return rows[: filters.limit] if filters.limit else rows

    def count_visits(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> int:
        self.calls.append("count_visits")
        return len(self.list_visits(VisitFilters(start_date=start_date, end_date=end_date)))

    def count_active(self) -> int:
        return len(self.list_active())

    def ping(self) -> bool:
        return True


def make_visit(
    student_name: str = "Alex R.",
    *,
    grade: str = "3",
    staff: str = "J. Smith",
    time_in: datetime = datetime(2026, 10, 14, 9, 0),
    time_out: Optional[datetime] = None,
    visit_date: Optional[date] = None,
    emotion: str = "Anxious/Worried",
    reason: str = "Needed a break",
) -> Visit:
    return Visit(
        visit_id=str(uuid.uuid4()),
        student_name=student_name,
        grade_level=GradeLevel(grade),
        staff_name=staff,
        visit_date=visit_date or time_in.date(),
        time_in=time_in,
        time_out=time_out,
        reason=reason,
        emotion=Emotion(emotion),
    )


