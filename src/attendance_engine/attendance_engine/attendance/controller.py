from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_AUDIT_DAYS
from ..core.enums import AlertType
from ..core.exceptions import ValidationError
from ..container import Container
from .duration import format_hours
from .mapper import session_to_dict


def _parse_date_arg(name: str, default):
    value = request.args.get(name)
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date") from None


def _parse_alert_type(value):
    if not value or value.upper() == "ALL":
        return None
    try:
        return AlertType(value.upper())
    except ValueError:
        raise ValidationError(f"Unknown alert type: {value}") from None


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/<subject_id>/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in(subject_id: str):
        session = service.clock_in(subject_id)
        return jsonify({"success": True, "session": session_to_dict(session)}), 201

    @app.route("/api/attendance/<subject_id>/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out(subject_id: str):
        session = service.clock_out(subject_id)
        return jsonify({"success": True, "session": session_to_dict(session)})

    @app.route("/api/attendance/<subject_id>", methods=["GET"], endpoint="session_report")
    def session_report(subject_id: str):
        return jsonify({"success": True, **service.session_report(subject_id)})

    @app.route("/api/attendance/<subject_id>/warnings", methods=["GET"], endpoint="warnings")
    def warnings(subject_id: str):
        items = service.warnings(subject_id)
        return jsonify(
            {
                "success": True,
                "warnings": [
                    {
                        "subject_id": w.subject_id,
                        "kind": w.kind.value,
                        "message": w.message,
                        "count": w.count,
                        "window_start": w.window_start.isoformat(),
                        "window_end": w.window_end.isoformat(),
                    }
                    for w in items
                ],
            }
        )

    @app.route("/api/attendance/<subject_id>/summary", methods=["GET"], endpoint="summary")
    def summary(subject_id: str):
        s = service.summary(subject_id)
        return jsonify(
            {
                "success": True,
                "subject_id": s.subject_id,
                "clocked_in": s.clocked_in,
                "active_session_id": s.active_session_id,
                "active_elapsed": format_hours(s.active_elapsed),
                "week_worked": format_hours(s.week_worked),
                "week_worked_seconds": int(s.week_worked.total_seconds()),
                "week_completed": s.week_completed,
                "month_completed": s.month_completed,
                "month_average": format_hours(s.month_average),
                "month_late": s.month_late,
                "punctuality_percent": s.punctuality_percent,
            }
        )

    @app.route("/api/sessions/<session_id>", methods=["GET"], endpoint="get_session")
    def get_session(session_id: str):
        return jsonify({"success": True, "session": service.get_session(session_id)})

    @app.route("/api/attendance/<subject_id>", methods=["DELETE"], endpoint="clear_sessions")
    def clear_sessions(subject_id: str):
        deleted = service.clear(subject_id)
        return jsonify({"success": True, "deleted": deleted})

    @app.route("/api/audit", methods=["GET"], endpoint="audit")
    def audit():
        today = service.today()
        start = _parse_date_arg("start", today - timedelta(days=DEFAULT_AUDIT_DAYS))
        end = _parse_date_arg("end", today)
        rows = service.audit(
            start=start,
            end=end,
            subject_id=request.args.get("subject_id") or None,
            alert_type=_parse_alert_type(request.args.get("type")),
        )
        return jsonify({"success": True, "start": start.isoformat(), "end": end.isoformat(), "records": rows})
