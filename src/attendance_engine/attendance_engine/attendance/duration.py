from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import comparable
from .model import AttendanceSession

IN_PROGRESS = "In Progress"


def worked_duration(session: AttendanceSession) -> Optional[timedelta]:
    """Time between login and logout; None when open or invalid."""
    if not session.has_valid_login or session.is_open or not session.has_valid_ordering:
        return None
    logout, login = comparable(session.logout_time, session.login_time)
    return logout - login


def format_duration(session: AttendanceSession) -> str:
    if session.has_valid_login and session.is_open:
        return IN_PROGRESS

    duration = worked_duration(session)
    if duration is None:
        return "-"

    total_seconds = int(duration.total_seconds())
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def total_worked(sessions: Iterable[AttendanceSession]) -> timedelta:
    total = timedelta()
    for session in sessions:
        duration = worked_duration(session)
        if duration is not None:
            total += duration
    return total


def format_hours(duration: timedelta) -> str:
    """``"8h 45m"`` style used on the dashboard cards."""
    minutes = int(duration.total_seconds()) // 60
    return f"{minutes // 60}h {minutes % 60}m"
