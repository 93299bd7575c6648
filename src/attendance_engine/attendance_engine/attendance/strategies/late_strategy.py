from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minute_of_day
from ...core.enums import StatusTag
from ..model import OfficeHoursConfig
from .base import AttendanceStrategy, StatusDecision, hhmm


class LateStrategy(AttendanceStrategy):
    """Late clock-in; on the exit side a late clock-out is overtime."""

    def decide_entry(self, *, login_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        minutes_late = minute_of_day(login_time) - config.start_hour * 60
        return StatusDecision(
            tag=StatusTag.LATE,
            note=f"Clocked in late at {hhmm(login_time)} ({minutes_late} min after {config.start_hour:02d}:00)",
        )

    def decide_exit(self, *, logout_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        return StatusDecision(tag=StatusTag.OVERTIME, note=f"Overtime until {hhmm(logout_time)}")
