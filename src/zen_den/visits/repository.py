from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import NewVisit, Visit, VisitFilters


class VisitRepository(Protocol):
    def create_visit(self, new_visit: NewVisit) -> Visit:
        """Insert a visit with no checkout time and return the stored row."""

        raise NotImplementedError

    def update_time_out(self, *, visit_id: str, time_out: datetime) -> Optional[Visit]:
        """Set time_out; None when no row matched."""

        raise NotImplementedError

    def list_active(self) -> Sequence[Visit]:
        """Visits with no checkout, earliest arrival first."""

        raise NotImplementedError

    def list_visits(self, filters: VisitFilters) -> Sequence[Visit]:
        """Visits matching filters, newest date first, then newest time_in."""

        raise NotImplementedError

    def count_visits(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> int:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def ping(self) -> bool:
        raise NotImplementedError
