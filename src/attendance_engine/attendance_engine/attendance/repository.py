from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceSession, SessionCorrection


class AttendanceRepository(Protocol):
    def list_sessions(
        self,
        *,
        subject_ids: Optional[Sequence[str]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceSession]:
        """Sessions whose login falls in ``[start, end]`` (either bound optional)."""

        raise NotImplementedError

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def create_session(self, *, subject_id: str, login_time: datetime) -> AttendanceSession:
        raise NotImplementedError

    def update_logout(self, *, session_id: str, logout_time: datetime) -> bool:
        raise NotImplementedError

    def delete_sessions(self, *, subject_id: str) -> int:
        raise NotImplementedError

    def apply_corrections(self, corrections: Sequence[SessionCorrection]) -> int:
        """Persist logout times computed by auto-close. Returns rows updated."""

        raise NotImplementedError
