from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import local_day, minute_of_day
from .model import OfficeHoursConfig
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on office-hour boundaries.

    Boundaries are compared at minute resolution on the wall clock of the
    timestamp.
    """

    def for_entry(self, *, login_time: datetime, config: OfficeHoursConfig) -> AttendanceStrategy:
        minute = minute_of_day(login_time)
        if minute < config.early_entry_cutoff:
            return EarlyStrategy()
        if minute <= config.grace_end:
            return NormalStrategy()
        return LateStrategy()

    def for_exit(self, *, login_time: datetime, logout_time: datetime, config: OfficeHoursConfig) -> AttendanceStrategy:
        # Clocking out on a later day than the clock-in is past any end boundary.
        if local_day(logout_time) > local_day(login_time):
            return LateStrategy()

        minute = minute_of_day(logout_time)
        if minute < config.end_minute:
            return EarlyStrategy()
        if minute <= config.exit_grace_end:
            return NormalStrategy()
        return LateStrategy()
