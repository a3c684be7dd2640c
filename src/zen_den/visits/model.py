from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_choice
from ..core.enums import Emotion, GradeLevel
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Visit:
    """Domain entity: one check-in/check-out record for a student."""

    visit_id: str
    student_name: str
    grade_level: GradeLevel
    staff_name: str
    visit_date: date
    time_in: datetime
    time_out: Optional[datetime]
    reason: str
    emotion: Emotion

    @property
    def is_active(self) -> bool:
        return self.time_out is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.visit_id,
            "student_name": self.student_name,
            "grade_level": self.grade_level.value,
            "staff_name": self.staff_name,
            "date": self.visit_date.isoformat(),
            "time_in": self.time_in.isoformat(),
            "time_out": self.time_out.isoformat() if self.time_out else None,
            "reason": self.reason,
            "emotion": self.emotion.value,
        }


@dataclass(frozen=True)
class NewVisit:
    """Validated check-in, ready to be persisted."""

    student_name: str
    grade_level: GradeLevel
    staff_name: str
    visit_date: date
    time_in: datetime
    reason: str
    emotion: Emotion


@dataclass(frozen=True)
class VisitFilters:
    """History filters. ``None`` means "not filtered"."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    grade_level: Optional[GradeLevel] = None
    emotion: Optional[Emotion] = None
    student_name: Optional[str] = None
    limit: Optional[int] = None

    @classmethod
    def parse(
        cls,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        grade_level: Optional[str] = None,
        emotion: Optional[str] = None,
        student_name: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "VisitFilters":
        """Build filters from raw form/query values ("all" and blanks are ignored)."""
        limit_value: Optional[int] = None
        if limit is not None and str(limit).strip():
            try:
                limit_value = int(limit)
            except ValueError:
                raise ValidationError("Limit must be a whole number.")
            if limit_value <= 0:
                raise ValidationError("Limit must be positive.")

        return cls(
            start_date=parse_optional_date(start_date, "Start date"),
            end_date=parse_optional_date(end_date, "End date"),
            grade_level=optional_choice(grade_level, GradeLevel, "Grade"),
            emotion=optional_choice(emotion, Emotion, "Emotion"),
            student_name=(student_name or "").strip() or None,
            limit=limit_value,
        )

    def without_limit(self) -> "VisitFilters":
        return VisitFilters(
            start_date=self.start_date,
            end_date=self.end_date,
            grade_level=self.grade_level,
            emotion=self.emotion,
            student_name=self.student_name,
        )

    def matches(self, visit: Visit) -> bool:
        """In-memory equivalent of the store's WHERE clause."""
        if self.start_date and visit.visit_date < self.start_date:
            return False
        if self.end_date and visit.visit_date > self.end_date:
            return False
        if self.grade_level and visit.grade_level != self.grade_level:
            return False
        if self.emotion and visit.emotion != self.emotion:
            return False
        if self.student_name and self.student_name.lower() not in visit.student_name.lower():
            return False
        return True
