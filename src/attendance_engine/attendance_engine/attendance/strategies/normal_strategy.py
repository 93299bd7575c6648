from __future__ import annotations

from datetime import datetime

from ...core.enums import StatusTag
from ..model import OfficeHoursConfig
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time clock-in, on-time clock-out."""

    def decide_entry(self, *, login_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        return StatusDecision(tag=StatusTag.GOOD_ENTRY)

    def decide_exit(self, *, logout_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        return StatusDecision(tag=StatusTag.GOOD_EXIT)
