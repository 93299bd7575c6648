from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import comparable, days_ago, start_of_month
from ..core.enums import StatusTag
from .classifier import decide
from .duration import total_worked, worked_duration
from .model import AttendanceSession, AttendanceSummary, OfficeHoursConfig

WEEK_DAYS = 7


def _since(session: AttendanceSession, start: datetime) -> bool:
    login, bound = comparable(session.login_time, start)
    return login >= bound


def summarize(
    sessions: Iterable[AttendanceSession],
    subject_id: str,
    as_of: datetime,
    config: OfficeHoursConfig,
    *,
    active_session_id: Optional[str] = None,
) -> AttendanceSummary:
    """Figures for one subject: the running session, the last 7 days and the calendar month.

    Worked time only counts completed sessions. Lateness uses the same
    classification as everywhere else, so it follows ``config``.
    """

    own = [s for s in sessions if s.subject_id == subject_id and s.has_valid_login]
    week = [s for s in own if _since(s, days_ago(WEEK_DAYS, as_of))]
    month = [s for s in own if _since(s, start_of_month(as_of))]
    month_completed = [s for s in month if worked_duration(s) is not None]

    month_average = timedelta()
    if month_completed:
        month_average = total_worked(month_completed) / len(month_completed)

    month_late = sum(1 for s in month if decide(s, config).has(StatusTag.LATE))
    punctuality = round((len(month) - month_late) * 100 / len(month)) if month else 0

    elapsed = timedelta()
    active = next((s for s in own if s.session_id == active_session_id), None)
    if active is not None:
        now, login = comparable(as_of, active.login_time)
        elapsed = max(now - login, timedelta())

    return AttendanceSummary(
        subject_id=subject_id,
        active_session_id=active.session_id if active is not None else None,
        active_elapsed=elapsed,
        week_worked=total_worked(week),
        week_completed=sum(1 for s in week if worked_duration(s) is not None),
        month_completed=len(month_completed),
        month_average=month_average,
        month_late=month_late,
        punctuality_percent=punctuality,
    )
