from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import comparable, end_of_day, now_local, start_of_day
from ..common.validators import require_non_empty
from ..core.constants import (
    DEFAULT_COMPLIANCE_THRESHOLD,
    DEFAULT_COMPLIANCE_WINDOW_DAYS,
    DEFAULT_RETENTION_DAYS,
)
from ..core.enums import AlertType, AnomalyKind
from ..core.exceptions import NotFoundError, ValidationError
from .alerts import alerts_for_session
from .classifier import decide
from .compliance import evaluate
from .duration import format_duration, total_worked, worked_duration
from .mapper import session_to_dict
from .model import (
    AttendanceSession,
    AttendanceSummary,
    ComplianceWarning,
    NormalizedResult,
    OfficeHoursConfig,
    SessionCorrection,
)
from .normalizer import normalize
from .repository import AttendanceRepository
from .summary import summarize

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases around the evaluation engine: clock in/out, views, warnings, audit.

    The engine itself stays pure; this layer reads the clock, fetches rows and
    writes back the auto-close corrections the normalizer computes.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        config: Optional[OfficeHoursConfig] = None,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        window_days: int = DEFAULT_COMPLIANCE_WINDOW_DAYS,
        threshold: int = DEFAULT_COMPLIANCE_THRESHOLD,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._config = config or OfficeHoursConfig()
        self._retention_days = int(retention_days)
        self._window_days = int(window_days)
        self._threshold = int(threshold)
        self._clock = clock

    @property
    def config(self) -> OfficeHoursConfig:
        return self._config

    def today(self) -> date:
        return self._clock().date()

    def _fetch(self, subject_ids: Optional[Sequence[str]], now: datetime) -> Sequence[AttendanceSession]:
        since = start_of_day(now) - timedelta(days=self._retention_days)
        return self._attendance.list_sessions(subject_ids=subject_ids, start=since)

    def _normalize_and_store(self, rows: Sequence[AttendanceSession], now: datetime) -> NormalizedResult:
        result = normalize(rows, now, self._retention_days)
        if result.corrections:
            updated = self._attendance.apply_corrections(result.corrections)
            logger.info("Auto-closed %d stale session(s), %d row(s) updated", len(result.corrections), updated)
        return result

    def load_view(self, subject_id: Optional[str] = None, *, now: Optional[datetime] = None) -> NormalizedResult:
        now = now or self._clock()
        subject_ids = [require_non_empty(subject_id, "subject_id")] if subject_id is not None else None
        return self._normalize_and_store(self._fetch(subject_ids, now), now)

    def clock_in(self, subject_id: str, *, now: Optional[datetime] = None) -> AttendanceSession:
        now = now or self._clock()
        subject_id = require_non_empty(subject_id, "subject_id")

        view = self.load_view(subject_id, now=now)
        if view.active_session_for(subject_id) is not None:
            raise ValidationError("Already clocked in; clock out first")

        session = self._attendance.create_session(subject_id=subject_id, login_time=now)
        logger.info("Clock-in: subject=%s session=%s", subject_id, session.session_id)
        return session

    def clock_out(self, subject_id: str, *, now: Optional[datetime] = None) -> AttendanceSession:
        now = now or self._clock()
        subject_id = require_non_empty(subject_id, "subject_id")

        view = self.load_view(subject_id, now=now)
        active = view.active_session_for(subject_id)
        if active is None:
            raise ValidationError("No open session to clock out of")

        logout, login = comparable(now, active.login_time)
        if logout < login:
            raise ValidationError("Clock-out time is before the clock-in time")

        self._attendance.update_logout(session_id=active.session_id, logout_time=now)
        logger.info("Clock-out: subject=%s session=%s", subject_id, active.session_id)
        self._close_duplicates(view, subject_id, now)
        return active.closed_at(now)

    def _close_duplicates(self, view: NormalizedResult, subject_id: str, logout_time: datetime) -> int:
        """Close the open sessions of today that the normalizer withheld, at the same logout time."""

        corrections: list[SessionCorrection] = []
        for anomaly in view.anomalies:
            if anomaly.kind != AnomalyKind.MULTIPLE_OPEN_SESSIONS or anomaly.subject_id != subject_id:
                continue
            for session_id in anomaly.session_ids:
                session = self._attendance.get_session(session_id)
                if session is None or not session.is_open or not session.has_valid_login:
                    continue
                logout, login = comparable(logout_time, session.login_time)
                if logout < login:
                    continue
                corrections.append(
                    SessionCorrection(session_id=session_id, subject_id=subject_id, logout_time=logout_time)
                )

        if not corrections:
            return 0
        updated = self._attendance.apply_corrections(corrections)
        logger.warning("Closed %d duplicate open session(s) of subject=%s", updated, subject_id)
        return updated

    def get_session(self, session_id: str) -> dict:
        session = self._attendance.get_session(require_non_empty(session_id, "session_id"))
        if session is None:
            raise NotFoundError(f"Attendance session {session_id} not found")
        return self._to_row(session)

    def summary(self, subject_id: str, *, now: Optional[datetime] = None) -> AttendanceSummary:
        """Dashboard figures: current session, last 7 days, this month."""
        now = now or self._clock()
        subject_id = require_non_empty(subject_id, "subject_id")
        view = self.load_view(subject_id, now=now)
        return summarize(
            view.sessions,
            subject_id,
            now,
            self._config,
            active_session_id=view.active_session_ids.get(subject_id),
        )

    def session_report(self, subject_id: str, *, now: Optional[datetime] = None) -> dict:
        """Canonical sessions of one subject with tags, durations and alerts."""
        now = now or self._clock()
        view = self.load_view(subject_id, now=now)
        total = total_worked(view.sessions)

        return {
            "subject_id": subject_id,
            "active_session_id": view.active_session_ids.get(subject_id),
            "sessions": [self._to_row(s) for s in view.sessions],
            "total_worked_seconds": int(total.total_seconds()),
            "anomalies": [
                {"kind": a.kind.value, "session_ids": list(a.session_ids), "message": a.message}
                for a in view.anomalies
            ],
        }

    def warnings(self, subject_id: Optional[str] = None, *, now: Optional[datetime] = None) -> list[ComplianceWarning]:
        """Compliance warnings over the trailing window.

        Evaluated on the rows as stored, so sessions left open on earlier days
        are reported once before the normalizer closes them.
        """

        now = now or self._clock()
        subject_ids = [require_non_empty(subject_id, "subject_id")] if subject_id is not None else None
        rows = self._fetch(subject_ids, now)
        warnings = evaluate(rows, now, self._config, window_days=self._window_days, threshold=self._threshold)
        self._normalize_and_store(rows, now)
        return warnings

    def audit(
        self,
        *,
        start: date,
        end: date,
        subject_id: Optional[str] = None,
        alert_type: Optional[AlertType] = None,
    ) -> list[dict]:
        """Admin audit over ``[start, end]`` (whole days), optionally filtered by alert type."""
        if start > end:
            raise ValidationError("start date must not be after end date")

        subject_ids = [require_non_empty(subject_id, "subject_id")] if subject_id else None
        rows = self._attendance.list_sessions(
            subject_ids=subject_ids,
            start=datetime.combine(start, time.min),
            end=end_of_day(datetime.combine(end, time.min)),
        )

        out = [self._to_row(s) for s in rows]
        if alert_type is not None:
            out = [r for r in out if alert_type.value in r["alert_types"]]
        return out

    def clear(self, subject_id: str) -> int:
        subject_id = require_non_empty(subject_id, "subject_id")
        deleted = self._attendance.delete_sessions(subject_id=subject_id)
        logger.info("Deleted %d session(s) of subject=%s", deleted, subject_id)
        return deleted

    def _to_row(self, session: AttendanceSession) -> dict:
        classification = decide(session, self._config)
        alerts = alerts_for_session(session, self._config)
        duration = worked_duration(session)

        row = session_to_dict(session)
        row.update(
            {
                "tags": [t.value for t in classification.tags],
                "anomaly": classification.anomaly.value if classification.anomaly else None,
                "notes": list(classification.notes),
                "duration": format_duration(session),
                "duration_seconds": int(duration.total_seconds()) if duration is not None else None,
                "alert_types": [a.type.value for a in alerts],
                "alerts": [
                    {"id": a.alert_id, "type": a.type.value, "message": a.message, "severity": a.severity.value}
                    for a in alerts
                ],
            }
        )
        return row
