from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import (
    combine_date_time,
    format_display_date,
    format_time_12h,
    now_local,
    parse_iso_date,
    parse_time_of_day,
)
from ..common.validators import require_choice, require_non_empty
from ..core.enums import Emotion, GradeLevel
from ..core.exceptions import ValidationError, VisitNotFoundError
from ..logging import get_logger
from ..staff.recent import RecentStaffStore
from .duration import duration_label, duration_minutes
from .model import NewVisit, Visit, VisitFilters
from .repository import VisitRepository

log = get_logger(__name__)

EMOTION_REQUIRED = "Please select how the student is feeling."


class VisitService:
    def __init__(self, visits: VisitRepository, *, clock: Callable[[], datetime] = now_local):
        self._visits = visits
        self._clock = clock

    def check_in(
        self,
        *,
        student_name: str,
        grade_level: str,
        staff_name: str,
        visit_date: str | date,
        time_in: str,
        reason: str,
        emotion: str,
        recent_staff: Optional[RecentStaffStore] = None,
    ) -> Visit:
        # Emotion comes from a button group, not a required input; check it first.
        if not (emotion or "").strip():
            raise ValidationError(EMOTION_REQUIRED)
        emotion_value = require_choice(emotion, Emotion, "Emotion")

        student = require_non_empty(student_name, "Student name")
        grade = require_choice(grade_level, GradeLevel, "Grade")
        staff = require_non_empty(staff_name, "Staff name")
        why = require_non_empty(reason, "Reason")

        if isinstance(visit_date, date):
            day = visit_date
        else:
            try:
                day = parse_iso_date(require_non_empty(visit_date, "Date"))
            except ValueError:
                raise ValidationError("Date must be in YYYY-MM-DD format.")
        arrived = combine_date_time(day, parse_time_of_day(time_in))

        visit = self._visits.create_visit(
            NewVisit(
                student_name=student,
                grade_level=grade,
                staff_name=staff,
                visit_date=day,
                time_in=arrived,
                reason=why,
                emotion=emotion_value,
            )
        )
        log.info("visit.checked_in", visit_id=visit.visit_id, grade=grade.value, emotion=emotion_value.value)

        if recent_staff is not None:
            recent_staff.remember(staff)
        return visit

    def check_out(self, visit_id: str, *, time_out: Optional[datetime] = None) -> Visit:
        visit_id = (visit_id or "").strip()
        if not visit_id:
            raise VisitNotFoundError("No visit selected for checkout")

        visit = self._visits.update_time_out(visit_id=visit_id, time_out=time_out or self._clock())
        if visit is None:
            raise VisitNotFoundError(f"Visit {visit_id} not found")

        log.info("visit.checked_out", visit_id=visit.visit_id)
        return visit

    def list_active(self) -> list[Visit]:
        return list(self._visits.list_active())

    def count_active(self) -> int:
        return int(self._visits.count_active())

    def list_all(self, filters: Optional[VisitFilters] = None) -> list[Visit]:
        return list(self._visits.list_visits(filters or VisitFilters()))

    def get_active_cards(self, *, now: Optional[datetime] = None) -> list[dict]:
        now = now or self._clock()
        return [self.to_card(v, now) for v in self.list_active()]

    def get_history_ui(self, filters: Optional[VisitFilters] = None) -> list[dict]:
        return [self.to_history_row(v) for v in self.list_all(filters)]

    @staticmethod
    def to_card(visit: Visit, now: datetime) -> dict:
        """Display model for the "currently here" view."""
        return {
            "id": visit.visit_id,
            "student_name": visit.student_name,
            "grade": f"Grade {visit.grade_level.value}",
            "checked_in": format_time_12h(visit.time_in),
            "time_in": visit.time_in.isoformat(),
            "duration": duration_label(visit.time_in, now),
        }

    @staticmethod
    def to_history_row(visit: Visit) -> dict:
        if visit.time_out:
            minutes: Optional[int] = duration_minutes(visit.time_in, visit.time_out)
            duration = f"{minutes} min"
            time_out = format_time_12h(visit.time_out)
        else:
            minutes = None
            duration = "Still here"
            time_out = "Still here"

        return {
            "id": visit.visit_id,
            "date": format_display_date(visit.visit_date),
            "student_name": visit.student_name,
            "grade_level": visit.grade_level.value,
            "staff_name": visit.staff_name,
            "time_in": format_time_12h(visit.time_in),
            "time_out": time_out,
            "still_here": visit.is_active,
            "duration": duration,
            "duration_minutes": minutes,
            "emotion": visit.emotion.value,
            "reason": visit.reason,
        }


def results_caption(count: int) -> str:
    if count == 0:
        return ""
    return f"Showing {count} visit{'' if count == 1 else 's'}"
