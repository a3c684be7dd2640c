from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import format_time_12h, now_local
from ..core.constants import EXPORT_FILENAME_PREFIX
from ..core.exceptions import NothingToExportError
from ..logging import get_logger
from ..visits.duration import duration_minutes
from ..visits.model import Visit, VisitFilters
from ..visits.repository import VisitRepository

log = get_logger(__name__)

CSV_HEADERS = [
    "Date",
    "Student Name",
    "Grade",
    "Staff Name",
    "Time In",
    "Time Out",
    "Duration (minutes)",
    "Emotion",
    "Reason",
]


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    row_count: int

    def to_bytes(self) -> bytes:
        # BOM so spreadsheet apps detect UTF-8
        return self.content.encode("utf-8-sig")


def export_filename(today: date) -> str:
    return f"{EXPORT_FILENAME_PREFIX}-{today.strftime('%Y-%m-%d')}.csv"


def visit_to_csv_fields(visit: Visit) -> list[str]:
    if visit.time_out:
        time_out = format_time_12h(visit.time_out)
        duration = str(duration_minutes(visit.time_in, visit.time_out))
    else:
        time_out = ""
        duration = ""

    return [
        visit.visit_date.isoformat(),
        visit.student_name,
        visit.grade_level.value,
        visit.staff_name,
        format_time_12h(visit.time_in),
        time_out,
        duration,
        visit.emotion.value,
        visit.reason,
    ]


def build_visits_csv(visits: Iterable[Visit]) -> str:
    """Header row as-is, then every data field double-quoted."""
    out = io.StringIO()
    out.write(",".join(CSV_HEADERS) + "\n")

    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for visit in visits:
        writer.writerow(visit_to_csv_fields(visit))

    # No terminator after the last row
    return out.getvalue().removesuffix("\n")


class CsvExportService:
    def __init__(self, visits: VisitRepository, *, clock: Callable[[], datetime] = now_local):
        self._visits = visits
        self._clock = clock

    def export(self, filters: Optional[VisitFilters] = None, *, today: Optional[date] = None) -> CsvExport:
        """Export every visit matching the history filters (any limit is dropped)."""
        query = (filters or VisitFilters()).without_limit()
        visits = list(self._visits.list_visits(query))
        if not visits:
            raise NothingToExportError("No data to export.")

        today = today or self._clock().date()
        export = CsvExport(filename=export_filename(today), content=build_visits_csv(visits), row_count=len(visits))
        log.info("export.built", rows=export.row_count, filename=export.filename)
        return export
