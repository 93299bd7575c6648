from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import StatusTag
from ..model import OfficeHoursConfig


@dataclass(frozen=True)
class StatusDecision:
    tag: StatusTag
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we tag one side of a session."""

    @abstractmethod
    def decide_entry(self, *, login_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_exit(self, *, logout_time: datetime, config: OfficeHoursConfig) -> StatusDecision:
        raise NotImplementedError


def hhmm(value: datetime) -> str:
    return value.strftime("%H:%M")
