from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local, start_of_month, start_of_week
from ..core.constants import FREQUENT_VISITOR_DAYS, FREQUENT_VISITOR_MIN_VISITS
from ..core.exceptions import StoreError
from ..logging import get_logger
from ..visits.model import Visit, VisitFilters
from ..visits.repository import VisitRepository
from . import aggregation
from .model import DashboardStats, FrequentVisitor

log = get_logger(__name__)


class DashboardService:
    """Dashboard statistics.

    Each statistic is fetched on its own and falls back to an empty value
    when the store fails (logged). Anything other than a StoreError
    propagates and fails the whole dashboard.
    """

    def __init__(
        self,
        visits: VisitRepository,
        *,
        frequent_days: int = FREQUENT_VISITOR_DAYS,
        frequent_min_visits: int = FREQUENT_VISITOR_MIN_VISITS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._visits = visits
        self._frequent_days = int(frequent_days)
        self._frequent_min_visits = int(frequent_min_visits)
        self._clock = clock

    def _today(self, today: Optional[date]) -> date:
        return today or self._clock().date()

    def _count(self, name: str, *, start_date: date, end_date: Optional[date] = None) -> int:
        try:
            return int(self._visits.count_visits(start_date=start_date, end_date=end_date))
        except StoreError:
            log.exception("dashboard.stat_failed", stat=name)
            return 0

    def _window(self, name: str, start_date: Optional[date], end_date: Optional[date]) -> Optional[list[Visit]]:
        try:
            return list(self._visits.list_visits(VisitFilters(start_date=start_date, end_date=end_date)))
        except StoreError:
            log.exception("dashboard.stat_failed", stat=name)
            return None

    def today_count(self, *, today: Optional[date] = None) -> int:
        day = self._today(today)
        return self._count("today_count", start_date=day, end_date=day)

    def week_count(self, *, today: Optional[date] = None) -> int:
        return self._count("week_count", start_date=start_of_week(self._today(today)))

    def month_count(self, *, today: Optional[date] = None) -> int:
        return self._count("month_count", start_date=start_of_month(self._today(today)))

    def grade_breakdown(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> dict[str, int]:
        rows = self._window("grade_breakdown", start_date, end_date)
        if rows is None:
            return aggregation.empty_grade_breakdown()
        return aggregation.grade_breakdown(rows)

    def emotion_breakdown(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> dict[str, int]:
        rows = self._window("emotion_breakdown", start_date, end_date)
        if rows is None:
            return aggregation.empty_emotion_breakdown()
        return aggregation.emotion_breakdown(rows)

    def time_of_day_breakdown(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> dict[str, int]:
        rows = self._window("time_of_day_breakdown", start_date, end_date)
        if rows is None:
            return aggregation.empty_time_of_day_breakdown()
        return aggregation.time_of_day_breakdown(rows)

    def frequent_visitors(
        self,
        *,
        today: Optional[date] = None,
        days: Optional[int] = None,
        min_visits: Optional[int] = None,
    ) -> list[FrequentVisitor]:
        days = self._frequent_days if days is None else int(days)
        min_visits = self._frequent_min_visits if min_visits is None else int(min_visits)

        since = self._today(today) - timedelta(days=days)
        rows = self._window("frequent_visitors", since, None)
        if rows is None:
            return []
        return aggregation.frequent_visitors(rows, min_visits=min_visits)

    def get_stats(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        *,
        now: Optional[datetime] = None,
    ) -> DashboardStats:
        """All seven statistics, fetched concurrently."""
        today = (now or self._clock()).date()

        with ThreadPoolExecutor(max_workers=7, thread_name_prefix="zen-den-dashboard") as pool:
            futures = {
                "today_count": pool.submit(self.today_count, today=today),
                "week_count": pool.submit(self.week_count, today=today),
                "month_count": pool.submit(self.month_count, today=today),
                "grade_breakdown": pool.submit(self.grade_breakdown, start_date, end_date),
                "emotion_breakdown": pool.submit(self.emotion_breakdown, start_date, end_date),
                "time_of_day_breakdown": pool.submit(self.time_of_day_breakdown, start_date, end_date),
                "frequent_visitors": pool.submit(self.frequent_visitors, today=today),
            }
            results = {name: f.result() for name, f in futures.items()}

        return DashboardStats(**results)
