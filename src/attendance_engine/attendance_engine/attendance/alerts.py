from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ..core.enums import AlertType, AnomalyKind, Severity, StatusTag
from .classifier import decide
from .duration import worked_duration
from .model import AttendanceAlert, AttendanceSession, OfficeHoursConfig
from .strategies.base import hhmm


def alerts_for_session(
    session: AttendanceSession,
    config: OfficeHoursConfig,
    *,
    name: Optional[str] = None,
) -> list[AttendanceAlert]:
    who = name or session.subject_id
    day = session.login_time.date() if session.has_valid_login else None

    def alert(suffix: str, type_: AlertType, message: str, severity: Severity) -> AttendanceAlert:
        return AttendanceAlert(
            alert_id=f"{session.session_id}-{suffix}",
            session_id=session.session_id,
            subject_id=session.subject_id,
            type=type_,
            message=message,
            date=day,
            severity=severity,
        )

    classification = decide(session, config)
    if classification.anomaly == AnomalyKind.MALFORMED_TIMESTAMP:
        return [alert("invalid", AlertType.INVALID_TIME, f"{who} has an unreadable timestamp", Severity.HIGH)]

    alerts: list[AttendanceAlert] = []
    if classification.anomaly == AnomalyKind.INVALID_TIME_ORDERING:
        alerts.append(alert("invalid", AlertType.INVALID_TIME, f"{who} clocked out before clocking in", Severity.HIGH))

    if classification.has(StatusTag.LATE):
        alerts.append(
            alert("late", AlertType.LATE_ARRIVAL, f"{who} clocked in late at {hhmm(session.login_time)}", Severity.MEDIUM)
        )

    if classification.has(StatusTag.EARLY_LEAVE):
        alerts.append(
            alert("early", AlertType.EARLY_DEPARTURE, f"{who} left early at {hhmm(session.logout_time)}", Severity.MEDIUM)
        )

    duration = worked_duration(session)
    if duration is not None and duration < config.min_work_duration:
        hours = duration.total_seconds() / 3600
        alerts.append(
            alert(
                "undertime",
                AlertType.UNDERTIME,
                f"{who} worked only {hours:.1f} hours (less than {config.min_work_hours:g}h)",
                Severity.HIGH,
            )
        )

    return alerts


def generate_alerts(
    sessions: Iterable[AttendanceSession],
    config: OfficeHoursConfig,
    *,
    names: Optional[Mapping[str, str]] = None,
) -> list[AttendanceAlert]:
    """Alerts for every session, in input order.

    ``names`` maps subject ids to display names used in the messages.
    """

    names = names or {}
    alerts: list[AttendanceAlert] = []
    for session in sessions:
        alerts.extend(alerts_for_session(session, config, name=names.get(session.subject_id)))
    return alerts
