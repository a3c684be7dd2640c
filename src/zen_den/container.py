from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .core.constants import FREQUENT_VISITOR_DAYS, FREQUENT_VISITOR_MIN_VISITS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .exports.csv_export import CsvExportService
from .visits.mysql_visit_repository import MySQLVisitRepository
from .visits.repository import VisitRepository
from .visits.service import VisitService


@dataclass(frozen=True)
class Container:
    visits_repo: VisitRepository

    visit_service: VisitService
    dashboard_service: DashboardService
    export_service: CsvExportService


def build_services(
    visits_repo: VisitRepository,
    *,
    frequent_days: int = FREQUENT_VISITOR_DAYS,
    frequent_min_visits: int = FREQUENT_VISITOR_MIN_VISITS,
) -> Container:
    """Wire services around any VisitRepository implementation."""
    return Container(
        visits_repo=visits_repo,
        visit_service=VisitService(visits_repo),
        dashboard_service=DashboardService(
            visits_repo,
            frequent_days=frequent_days,
            frequent_min_visits=frequent_min_visits,
        ),
        export_service=CsvExportService(visits_repo),
    )


def build_container(
    *,
    db_config: Mapping[str, Any],
    frequent_days: int = FREQUENT_VISITOR_DAYS,
    frequent_min_visits: int = FREQUENT_VISITOR_MIN_VISITS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        MySQLVisitRepository(conn),
        frequent_days=frequent_days,
        frequent_min_visits=frequent_min_visits,
    )
