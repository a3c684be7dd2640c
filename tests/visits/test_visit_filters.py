from __future__ import annotations

from datetime import date

import pytest

from zen_den.core.enums import Emotion, GradeLevel
from zen_den.core.exceptions import ValidationError
from zen_den.visits.model import VisitFilters

from fakes import make_visit


def test_parse_treats_all_and_blank_as_unfiltered():
    filters = VisitFilters.parse(start_date="", end_date=None, grade_level="all", emotion="all", student_name="  ")
    assert filters == VisitFilters()


def test_parse_converts_values():
    filters = VisitFilters.parse(
        start_date="2026-10-01",
        end_date="2026-10-31",
        grade_level="K",
        emotion="Anxious/Worried",
        student_name=" sam ",
        limit="25",
    )
    assert filters.start_date == date(2026, 10, 1)
    assert filters.end_date == date(2026, 10, 31)
    assert filters.grade_level is GradeLevel.K
    assert filters.emotion is Emotion.ANXIOUS
    assert filters.student_name == "sam"
    assert filters.limit == 25


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start_date": "10/01/2026"},
        {"grade_level": "9"},
        {"emotion": "Happy"},
        {"limit": "ten"},
        {"limit": "0"},
    ],
)
def test_parse_rejects_bad_values(kwargs):
    with pytest.raises(ValidationError):
        VisitFilters.parse(**kwargs)


def test_matches_student_name_case_insensitive_substring():
    filters = VisitFilters(student_name="ALEX")
    assert filters.matches(make_visit("alexandra P."))
    assert not filters.matches(make_visit("Sam"))


def test_date_window_is_inclusive():
    filters = VisitFilters(start_date=date(2026, 10, 14), end_date=date(2026, 10, 14))
    assert filters.matches(make_visit(visit_date=date(2026, 10, 14)))
    assert not filters.matches(make_visit(visit_date=date(2026, 10, 15)))
    assert not filters.matches(make_visit(visit_date=date(2026, 10, 13)))
