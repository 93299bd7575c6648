from __future__ import annotations

from typing import Any, Mapping

from ..common.datetime_utils import parse_timestamp
from ..common.validators import require_non_empty
from .model import AttendanceSession


def session_from_row(row: Mapping[str, Any]) -> AttendanceSession:
    """Validate one stored row into an ``AttendanceSession``.

    Accepts the column names of ``attendance_sessions`` as well as the
    ``id``/``email`` keys of exported logs. A missing or unreadable login, or
    an unreadable logout, leaves ``login_time`` as None so the engine flags
    the row as malformed instead of guessing.
    """

    session_id = require_non_empty(str(row.get("session_id") or row.get("id") or ""), "session_id")
    subject_id = require_non_empty(str(row.get("subject_id") or row.get("email") or ""), "subject_id")

    login_time = parse_timestamp(row.get("login_time"))
    raw_logout = row.get("logout_time")
    logout_time = parse_timestamp(raw_logout)

    if raw_logout not in (None, "") and logout_time is None:
        login_time = None

    return AttendanceSession(
        session_id=session_id,
        subject_id=subject_id,
        login_time=login_time,
        logout_time=logout_time,
    )


def session_to_dict(session: AttendanceSession) -> dict:
    return {
        "session_id": session.session_id,
        "subject_id": session.subject_id,
        "login_time": session.login_time.isoformat() if session.login_time else None,
        "logout_time": session.logout_time.isoformat() if session.logout_time else None,
    }
