from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.enums import Emotion, GradeLevel
from ..core.exceptions import NothingToExportError, ValidationError
from ..logging import get_logger
from ..staff.recent import RecentStaffStore
from .model import VisitFilters
from .service import results_caption

log = get_logger(__name__)

CHECK_IN_FAILED = "Failed to check in student. Please try again."
CHECK_OUT_FAILED = "Failed to check out student. Please try again."
LOAD_ACTIVE_FAILED = "Failed to load active visits."
LOAD_HISTORY_FAILED = "Failed to load visit history."
EXPORT_FAILED = "Failed to export. Please try again."


def filters_from_args(args) -> VisitFilters:
    return VisitFilters.parse(
        start_date=args.get("start_date"),
        end_date=args.get("end_date"),
        grade_level=args.get("grade"),
        emotion=args.get("emotion"),
        student_name=args.get("q"),
        limit=args.get("limit"),
    )


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        try:
            ok = container.visits_repo.ping()
        except Exception:
            log.exception("health.store_unreachable")
            ok = False
        return jsonify({"status": "ok" if ok else "unavailable"}), 200 if ok else 503

    @app.route("/api/options", methods=["GET"], endpoint="options")
    def options():
        return jsonify(
            {
                "grades": [{"value": g.value, "label": g.label} for g in GradeLevel],
                "emotions": [e.value for e in Emotion],
            }
        )

    @app.route("/api/staff/recent", methods=["GET"], endpoint="recent_staff")
    def recent_staff():
        return jsonify({"recent_staff": RecentStaffStore(session).names()})

    @app.route("/api/visits", methods=["POST"], endpoint="check_in")
    def check_in():
        data = request.get_json(silent=True) or request.form
        now = now_local()
        recent = RecentStaffStore(session)

        try:
            visit = container.visit_service.check_in(
                student_name=data.get("student_name", ""),
                grade_level=data.get("grade_level", ""),
                staff_name=data.get("staff_name", ""),
                visit_date=data.get("date") or now.strftime("%Y-%m-%d"),
                time_in=data.get("time_in") or now.strftime("%H:%M"),
                reason=data.get("reason", ""),
                emotion=data.get("emotion", ""),
                recent_staff=recent,
            )
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            log.exception("visit.check_in_failed")
            return _error(CHECK_IN_FAILED, 500)

        return (
            jsonify(
                {
                    "success": True,
                    "message": "Student checked in successfully!",
                    "visit": visit.to_dict(),
                    "recent_staff": recent.names(),
                }
            ),
            201,
        )

    @app.route("/api/visits/<visit_id>/checkout", methods=["POST"], endpoint="check_out")
    def check_out(visit_id: str):
        # Unknown ids fall into the generic failure like any other store problem.
        try:
            visit = container.visit_service.check_out(visit_id)
        except Exception:
            log.exception("visit.check_out_failed", visit_id=visit_id)
            return _error(CHECK_OUT_FAILED, 500)

        return jsonify({"success": True, "message": "Student checked out.", "visit": visit.to_dict()})

    @app.route("/api/visits/active", methods=["GET"], endpoint="active_visits")
    def active_visits():
        try:
            cards = container.visit_service.get_active_cards()
        except Exception:
            log.exception("visit.load_active_failed")
            return _error(LOAD_ACTIVE_FAILED, 500)

        return jsonify({"count": len(cards), "visits": cards})

    @app.route("/api/visits", methods=["GET"], endpoint="history")
    def history():
        try:
            filters = filters_from_args(request.args)
        except ValidationError as e:
            return _error(str(e), 400)

        try:
            rows = container.visit_service.get_history_ui(filters)
        except Exception:
            log.exception("visit.load_history_failed")
            return _error(LOAD_HISTORY_FAILED, 500)

        return jsonify({"count": len(rows), "caption": results_caption(len(rows)), "visits": rows})

    @app.route("/api/visits/export.csv", methods=["GET"], endpoint="export_csv")
    def export_csv():
        try:
            filters = filters_from_args(request.args)
        except ValidationError as e:
            return _error(str(e), 400)

        try:
            export = container.export_service.export(filters)
        except NothingToExportError as e:
            return _error(str(e), 404)
        except Exception:
            log.exception("export.failed")
            return _error(EXPORT_FAILED, 500)

        return app.response_class(
            export.to_bytes(),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
