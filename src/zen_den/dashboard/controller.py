from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..container import Container
from ..core.exceptions import ValidationError
from ..logging import get_logger
from .aggregation import breakdown_rows
from .model import EMOTION_LABELS, GRADE_LABELS, TIME_OF_DAY_LABELS

log = get_logger(__name__)

LOAD_DASHBOARD_FAILED = "Failed to load dashboard. Please try again."


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        try:
            start = parse_optional_date(request.args.get("start_date"), "Start date")
            end = parse_optional_date(request.args.get("end_date"), "End date")
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        try:
            stats = container.dashboard_service.get_stats(start, end)
        except Exception:
            log.exception("dashboard.load_failed")
            return jsonify({"success": False, "message": LOAD_DASHBOARD_FAILED}), 500

        return jsonify(
            {
                "stats": stats.to_dict(),
                "charts": {
                    "grades": breakdown_rows(stats.grade_breakdown, GRADE_LABELS),
                    "emotions": breakdown_rows(stats.emotion_breakdown, EMOTION_LABELS),
                    "time_of_day": breakdown_rows(stats.time_of_day_breakdown, TIME_OF_DAY_LABELS),
                },
            }
        )
