from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, execute_many, fetchall, fetchone
from .mapper import session_from_row
from .model import AttendanceSession, SessionCorrection
from .repository import AttendanceRepository

_COLUMNS = "session_id, subject_id, login_time, logout_time"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_sessions(
        self,
        *,
        subject_ids: Optional[Sequence[str]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceSession]:
        clauses: list[str] = []
        params: list[object] = []

        if subject_ids is not None:
            if not subject_ids:
                return []
            placeholders = ",".join(["%s"] * len(subject_ids))
            clauses.append(f"subject_id IN ({placeholders})")
            params.extend(str(s) for s in subject_ids)
        if start is not None:
            clauses.append("login_time >= %s")
            params.append(start)
        if end is not None:
            clauses.append("login_time <= %s")
            params.append(end)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                {where}
                ORDER BY login_time DESC
                """,
                tuple(params),
            )
            return [session_from_row(r) for r in fetchall(cur)]

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s",
                (session_id,),
            )
            r = fetchone(cur)
            return session_from_row(r) if r else None

    def create_session(self, *, subject_id: str, login_time: datetime) -> AttendanceSession:
        session_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(session_id, subject_id, login_time)
                VALUES(%s,%s,%s)
                """,
                (session_id, subject_id, login_time),
            )
        return AttendanceSession(session_id=session_id, subject_id=subject_id, login_time=login_time)

    def update_logout(self, *, session_id: str, logout_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_sessions SET logout_time=%s WHERE session_id=%s",
                (logout_time, session_id),
            )
            return cur.rowcount > 0

    def delete_sessions(self, *, subject_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_sessions WHERE subject_id=%s", (subject_id,))
            return int(cur.rowcount)

    def apply_corrections(self, corrections: Sequence[SessionCorrection]) -> int:
        return execute_many(
            self._conn_factory,
            "UPDATE attendance_sessions SET logout_time=%s WHERE session_id=%s AND logout_time IS NULL",
            [(c.logout_time, c.session_id) for c in corrections],
        )
