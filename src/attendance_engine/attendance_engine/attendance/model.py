from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import comparable
from ..common.validators import require_non_negative, require_range
from ..core import constants
from ..core.enums import AlertType, AnomalyKind, Severity, StatusTag, WarningKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one clock-in/clock-out pair of a subject.

    ``login_time`` is None only for rows that failed validation at the
    persistence boundary; the engine reports those as malformed.
    """

    session_id: str
    subject_id: str
    login_time: Optional[datetime]
    logout_time: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.logout_time is None

    @property
    def has_valid_login(self) -> bool:
        return isinstance(self.login_time, datetime)

    @property
    def has_valid_ordering(self) -> bool:
        if not self.has_valid_login or self.logout_time is None:
            return True
        logout, login = comparable(self.logout_time, self.login_time)
        return logout >= login

    def closed_at(self, logout_time: datetime) -> "AttendanceSession":
        return replace(self, logout_time=logout_time)


@dataclass(frozen=True)
class OfficeHoursConfig:
    """Office-hour boundaries used for one classification pass.

    Entry: before ``start - early_entry_lead_minutes`` is early, up to
    ``start + grace_period_minutes`` is on time, later is late.
    Exit: before ``end`` is early, up to ``end + exit_grace_minutes`` is on
    time, later is overtime.
    """

    start_hour: int = constants.DEFAULT_START_HOUR
    end_hour: int = constants.DEFAULT_END_HOUR
    grace_period_minutes: int = constants.DEFAULT_GRACE_PERIOD_MINUTES
    early_entry_lead_minutes: int = constants.DEFAULT_EARLY_ENTRY_LEAD_MINUTES
    exit_grace_minutes: int = constants.DEFAULT_EXIT_GRACE_MINUTES
    min_work_hours: float = constants.DEFAULT_MIN_WORK_HOURS

    def __post_init__(self) -> None:
        require_range(self.start_hour, "start_hour", 0, 23)
        require_range(self.end_hour, "end_hour", 0, 23)
        require_non_negative(self.grace_period_minutes, "grace_period_minutes")
        require_non_negative(self.early_entry_lead_minutes, "early_entry_lead_minutes")
        require_non_negative(self.exit_grace_minutes, "exit_grace_minutes")
        if isinstance(self.min_work_hours, bool) or not isinstance(self.min_work_hours, (int, float)) or self.min_work_hours <= 0:
            raise ValidationError("min_work_hours must be a positive number")

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "OfficeHoursConfig":
        data = dict(data or {})
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        return cls(**known)

    @property
    def early_entry_cutoff(self) -> int:
        """Minute of day before which a login counts as early."""
        return self.start_hour * 60 - self.early_entry_lead_minutes

    @property
    def grace_end(self) -> int:
        return self.start_hour * 60 + self.grace_period_minutes

    @property
    def end_minute(self) -> int:
        return self.end_hour * 60

    @property
    def exit_grace_end(self) -> int:
        return self.end_hour * 60 + self.exit_grace_minutes

    @property
    def min_work_duration(self) -> timedelta:
        return timedelta(hours=self.min_work_hours)


@dataclass(frozen=True)
class Anomaly:
    kind: AnomalyKind
    subject_id: str
    session_ids: tuple[str, ...]
    message: str


@dataclass(frozen=True)
class SessionCorrection:
    """Logout time computed by auto-close that the caller should persist."""

    session_id: str
    subject_id: str
    logout_time: datetime


@dataclass(frozen=True)
class NormalizedResult:
    sessions: list[AttendanceSession]
    active_session_ids: dict[str, str] = field(default_factory=dict)
    corrections: list[SessionCorrection] = field(default_factory=list)
    anomalies: list[Anomaly] = field(default_factory=list)

    def active_session_for(self, subject_id: str) -> Optional[AttendanceSession]:
        session_id = self.active_session_ids.get(subject_id)
        if session_id is None:
            return None
        return next((s for s in self.sessions if s.session_id == session_id), None)


@dataclass(frozen=True)
class ComplianceWarning:
    subject_id: str
    kind: WarningKind
    message: str
    count: int
    window_start: datetime
    window_end: datetime


@dataclass(frozen=True)
class AttendanceAlert:
    """Per-session alert shown on the admin notification panel."""

    alert_id: str
    session_id: str
    subject_id: str
    type: AlertType
    message: str
    date: Optional[date]
    severity: Severity


@dataclass(frozen=True)
class AttendanceSummary:
    """Dashboard figures for one subject as of a point in time."""

    subject_id: str
    active_session_id: Optional[str]
    active_elapsed: timedelta
    week_worked: timedelta
    week_completed: int
    month_completed: int
    month_average: timedelta
    month_late: int
    punctuality_percent: int

    @property
    def clocked_in(self) -> bool:
        return self.active_session_id is not None
