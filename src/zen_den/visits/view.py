from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..common.datetime_utils import now_local
from ..core.constants import DURATION_REFRESH_SECONDS
from ..logging import get_logger
from .model import Visit
from .service import VisitService

log = get_logger(__name__)

RefreshCallback = Callable[[list[dict]], None]


class CurrentVisitsView:
    """State of one "currently here" view.

    Holds the active visits loaded from the store, the visit awaiting
    checkout confirmation and the once-a-minute job that refreshes duration
    labels from the loaded snapshot. The job runs only between
    start_duration_updates() and stop_duration_updates()/close().
    """

    def __init__(
        self,
        service: VisitService,
        *,
        clock: Callable[[], datetime] = now_local,
        interval_seconds: float = DURATION_REFRESH_SECONDS,
        on_refresh: Optional[RefreshCallback] = None,
    ):
        self._service = service
        self._clock = clock
        self._interval_seconds = float(interval_seconds)
        self._on_refresh = on_refresh

        self._visits: list[Visit] = []
        self._pending_checkout_id: Optional[str] = None
        self._scheduler: Optional[BackgroundScheduler] = None

    def __enter__(self) -> "CurrentVisitsView":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def visits(self) -> list[Visit]:
        return list(self._visits)

    @property
    def count(self) -> int:
        return len(self._visits)

    @property
    def pending_checkout_id(self) -> Optional[str]:
        return self._pending_checkout_id

    @property
    def is_refreshing(self) -> bool:
        return self._scheduler is not None

    def load(self) -> list[dict]:
        """Query the store for active visits and return fresh cards."""
        self._visits = self._service.list_active()
        return self.cards()

    def cards(self) -> list[dict]:
        now = self._clock()
        return [self._service.to_card(v, now) for v in self._visits]

    def refresh_durations(self) -> list[dict]:
        """Recompute durations for the loaded snapshot (no store query)."""
        cards = self.cards()
        if self._on_refresh is not None:
            self._on_refresh(cards)
        return cards

    def start_duration_updates(self) -> None:
        self.stop_duration_updates()

        scheduler = BackgroundScheduler(daemon=True)
        scheduler.add_job(
            self.refresh_durations,
            IntervalTrigger(seconds=self._interval_seconds),
            id="duration-refresh",
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        log.debug("view.duration_updates_started", interval=self._interval_seconds)

    def stop_duration_updates(self) -> None:
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        log.debug("view.duration_updates_stopped")

    def open_checkout(self, visit_id: str) -> None:
        self._pending_checkout_id = visit_id

    def cancel_checkout(self) -> None:
        self._pending_checkout_id = None

    def confirm_checkout(self, *, time_out: Optional[datetime] = None) -> Optional[Visit]:
        """Check out the pending visit and reload.

        Does nothing when no checkout is pending. On failure the pending
        target is kept so the user can retry.
        """
        if not self._pending_checkout_id:
            return None

        visit = self._service.check_out(self._pending_checkout_id, time_out=time_out)
        self._pending_checkout_id = None
        self.load()
        return visit

    def close(self) -> None:
        self.stop_duration_updates()
        self._pending_checkout_id = None
