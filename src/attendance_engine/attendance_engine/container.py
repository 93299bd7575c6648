from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.model import OfficeHoursConfig
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core import constants
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    office_hours: Optional[dict] = None,
    retention_days: int = constants.DEFAULT_RETENTION_DAYS,
    window_days: int = constants.DEFAULT_COMPLIANCE_WINDOW_DAYS,
    threshold: int = constants.DEFAULT_COMPLIANCE_THRESHOLD,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    attendance_service = AttendanceService(
        attendance_repo,
        config=OfficeHoursConfig.from_dict(office_hours),
        retention_days=retention_days,
        window_days=window_days,
        threshold=threshold,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
    )
