from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from ..common.datetime_utils import comparable, local_day
from ..core.constants import DEFAULT_COMPLIANCE_THRESHOLD, DEFAULT_COMPLIANCE_WINDOW_DAYS
from ..core.enums import StatusTag, WarningKind
from .classifier import decide
from .model import AttendanceSession, ComplianceWarning, OfficeHoursConfig


def _in_window(login_time: datetime, window_start: datetime, window_end: datetime) -> bool:
    after_start, start = comparable(login_time, window_start)
    before_end, end = comparable(login_time, window_end)
    return after_start > start and before_end <= end


def _evaluate_subject(
    subject_id: str,
    sessions: list[AttendanceSession],
    as_of: datetime,
    config: OfficeHoursConfig,
    window_days: int,
    threshold: int,
) -> list[ComplianceWarning]:
    window_start = as_of - timedelta(days=window_days)
    today = local_day(as_of)

    unclosed = 0
    late = 0
    early_leave = 0
    for session in sessions:
        if session.is_open and local_day(session.login_time) < today:
            unclosed += 1
        if not _in_window(session.login_time, window_start, as_of):
            continue
        classification = decide(session, config)
        if classification.has(StatusTag.LATE):
            late += 1
        if classification.has(StatusTag.EARLY_LEAVE):
            early_leave += 1

    def warn(kind: WarningKind, count: int, message: str) -> ComplianceWarning:
        return ComplianceWarning(
            subject_id=subject_id,
            kind=kind,
            message=message,
            count=count,
            window_start=window_start,
            window_end=as_of,
        )

    warnings: list[ComplianceWarning] = []
    if unclosed:
        warnings.append(
            warn(
                WarningKind.UNCLOSED_SESSION,
                unclosed,
                f"{unclosed} session(s) from previous days were never clocked out",
            )
        )
    if late >= threshold:
        warnings.append(
            warn(
                WarningKind.EXCESSIVE_LATENESS,
                late,
                f"Late arrival {late} times in the last {window_days} days",
            )
        )
    if early_leave >= threshold:
        warnings.append(
            warn(
                WarningKind.EXCESSIVE_EARLY_LEAVE,
                early_leave,
                f"Left early {early_leave} times in the last {window_days} days",
            )
        )
    return warnings


def evaluate(
    subject_sessions: Iterable[AttendanceSession],
    as_of: datetime,
    config: OfficeHoursConfig,
    *,
    window_days: int = DEFAULT_COMPLIANCE_WINDOW_DAYS,
    threshold: int = DEFAULT_COMPLIANCE_THRESHOLD,
) -> list[ComplianceWarning]:
    """Aggregate repeated violations over the trailing window ending at ``as_of``.

    Sessions are grouped by subject, so a mixed list yields warnings per
    subject. Sessions without a valid login are ignored here; the normalizer
    reports them.
    """

    by_subject: dict[str, list[AttendanceSession]] = {}
    for session in subject_sessions:
        if session.has_valid_login:
            by_subject.setdefault(session.subject_id, []).append(session)

    warnings: list[ComplianceWarning] = []
    for subject_id, sessions in by_subject.items():
        warnings.extend(_evaluate_subject(subject_id, sessions, as_of, config, int(window_days), int(threshold)))
    return warnings
