from __future__ import annotations

from datetime import datetime

from ...core.enums import StatusTag
from ..model import OfficeHoursConfig
from .base import AttendanceStrategy, StatusDecision, hhmm


class EarlyStrategy(AttendanceStrategy):
    """Early entry on clock-in, early leave on clock-out."""

    def decide_entry(self, *, login_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        return StatusDecision(tag=StatusTag.EARLY_ENTRY, note=f"Early entry at {hhmm(login_time)}")

    def decide_exit(self, *, logout_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        return StatusDecision(
            tag=StatusTag.EARLY_LEAVE,
            note=f"Left early at {hhmm(logout_time)} (office ends {config.end_hour:02d}:00)",
        )
