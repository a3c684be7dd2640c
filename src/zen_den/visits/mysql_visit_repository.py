from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Emotion, GradeLevel
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    contains_pattern,
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_date,
    normalize_mysql_datetime,
)
from .model import NewVisit, Visit, VisitFilters
from .repository import VisitRepository

_SELECT = """
    SELECT id, student_name, grade_level, staff_name, visit_date, time_in, time_out, reason, emotion
    FROM visits
"""


def _to_visit(r: Mapping[str, Any]) -> Visit:
    time_in = normalize_mysql_datetime(r["time_in"])
    if time_in is None:
        raise ValueError(f"Visit {r.get('id')!r} has no time_in")
    return Visit(
        visit_id=str(r["id"]),
        student_name=r["student_name"],
        grade_level=GradeLevel(str(r["grade_level"])),
        staff_name=r["staff_name"],
        visit_date=normalize_mysql_date(r["visit_date"]),
        time_in=time_in,
        time_out=normalize_mysql_datetime(r.get("time_out")),
        reason=r["reason"],
        emotion=Emotion(r["emotion"]),
    )


def _date_clauses(start_date: Optional[date], end_date: Optional[date]) -> tuple[list[str], list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if start_date is not None:
        clauses.append("visit_date >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("visit_date <= %s")
        params.append(end_date)
    return clauses, params


class MySQLVisitRepository(VisitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_visit(self, new_visit: NewVisit) -> Visit:
        visit_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO visits(id, student_name, grade_level, staff_name, visit_date, time_in, time_out, reason, emotion)
                VALUES(%s,%s,%s,%s,%s,%s,NULL,%s,%s)
                """,
                (
                    visit_id,
                    new_visit.student_name,
                    new_visit.grade_level.value,
                    new_visit.staff_name,
                    new_visit.visit_date,
                    new_visit.time_in,
                    new_visit.reason,
                    new_visit.emotion.value,
                ),
            )
            cur.execute(_SELECT + " WHERE id=%s", (visit_id,))
            r = fetchone(cur)
            if not r:
                raise RuntimeError(f"Inserted visit {visit_id} could not be read back")
            return _to_visit(r)

    def update_time_out(self, *, visit_id: str, time_out: datetime) -> Optional[Visit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE visits SET time_out=%s WHERE id=%s", (time_out, visit_id))
            if cur.rowcount <= 0:
                return None
            cur.execute(_SELECT + " WHERE id=%s", (visit_id,))
            r = fetchone(cur)
            return _to_visit(r) if r else None

    def list_active(self) -> Sequence[Visit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE time_out IS NULL ORDER BY time_in ASC")
            return [_to_visit(r) for r in fetchall(cur)]

    def list_visits(self, filters: VisitFilters) -> Sequence[Visit]:
        clauses, params = _date_clauses(filters.start_date, filters.end_date)

        if filters.grade_level is not None:
            clauses.append("grade_level=%s")
            params.append(filters.grade_level.value)
        if filters.emotion is not None:
            clauses.append("emotion=%s")
            params.append(filters.emotion.value)
        if filters.student_name:
            clauses.append("LOWER(student_name) LIKE LOWER(%s)")
            params.append(contains_pattern(filters.student_name))

        sql = _SELECT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY visit_date DESC, time_in DESC"
        if filters.limit:
            sql += " LIMIT %s"
            params.append(int(filters.limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_visit(r) for r in fetchall(cur)]

    def count_visits(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> int:
        clauses, params = _date_clauses(start_date, end_date)
        sql = "SELECT COUNT(*) AS n FROM visits"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM visits WHERE time_out IS NULL")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def ping(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS ok")
            r = fetchone(cur)
            return bool(r and r["ok"] == 1)
