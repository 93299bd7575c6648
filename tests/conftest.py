"""Shared fakes and fixtures for the attendance engine test suite."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.attendance_engine.attendance_engine.attendance.model import AttendanceSession, OfficeHoursConfig

# Monday evening; the trailing 7-day window starts 2024-06-03 20:00.
NOW = datetime(2024, 6, 10, 20, 0)


class InMemoryAttendance:
    def __init__(self, sessions=()):
        self._rows: dict[str, AttendanceSession] = {s.session_id: s for s in sessions}
        self._id = 0
        self.corrections_applied = 0

    def get(self, session_id: str) -> AttendanceSession:
        return self._rows[session_id]

    def all(self) -> list[AttendanceSession]:
        return list(self._rows.values())

    def list_sessions(self, *, subject_ids=None, start=None, end=None):
        items = [s for s in self._rows.values() if subject_ids is None or s.subject_id in subject_ids]
        if start is not None:
            items = [s for s in items if s.login_time is None or s.login_time >= start]
        if end is not None:
            items = [s for s in items if s.login_time is None or s.login_time <= end]
        items.sort(key=lambda s: s.login_time or datetime.min, reverse=True)
        return items

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        return self._rows.get(session_id)

    def create_session(self, *, subject_id: str, login_time: datetime) -> AttendanceSession:
        self._id += 1
        session = AttendanceSession(session_id=f"new-{self._id}", subject_id=subject_id, login_time=login_time)
        self._rows[session.session_id] = session
        return session

    def update_logout(self, *, session_id: str, logout_time: datetime) -> bool:
        session = self._rows.get(session_id)
        if not session:
            return False
        self._rows[session_id] = replace(session, logout_time=logout_time)
        return True

    def delete_sessions(self, *, subject_id: str) -> int:
        doomed = [sid for sid, s in self._rows.items() if s.subject_id == subject_id]
        for sid in doomed:
            del self._rows[sid]
        return len(doomed)

    def apply_corrections(self, corrections) -> int:
        updated = 0
        for c in corrections:
            session = self._rows.get(c.session_id)
            if session and session.logout_time is None:
                self._rows[c.session_id] = replace(session, logout_time=c.logout_time)
                updated += 1
        self.corrections_applied += updated
        return updated


def make_session(session_id: str, login: Optional[datetime], logout: Optional[datetime] = None, subject: str = "alice"):
    return AttendanceSession(session_id=session_id, subject_id=subject, login_time=login, logout_time=logout)


@pytest.fixture
def office_hours() -> OfficeHoursConfig:
    return OfficeHoursConfig(start_hour=10, end_hour=19, grace_period_minutes=0)


@pytest.fixture
def now() -> datetime:
    return NOW
