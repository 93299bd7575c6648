from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AnomalyKind, StatusTag
from .factory import AttendanceStrategyFactory
from .model import AttendanceSession, OfficeHoursConfig

_DEFAULT_FACTORY = AttendanceStrategyFactory()


@dataclass(frozen=True)
class Classification:
    """Tags for one session plus the anomaly that limited them, if any."""

    tags: tuple[StatusTag, ...]
    anomaly: Optional[AnomalyKind] = None
    notes: tuple[str, ...] = field(default_factory=tuple)

    def has(self, tag: StatusTag) -> bool:
        return tag in self.tags


def decide(
    session: AttendanceSession,
    config: OfficeHoursConfig,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> Classification:
    """Classify one session against office hours.

    Pure function of ``(session, config)``: an invalid login yields
    ``[InvalidTime]``; a logout before the login keeps the entry tag only and
    carries an ``InvalidTimeOrdering`` anomaly.
    """

    if not session.has_valid_login:
        return Classification(tags=(StatusTag.INVALID_TIME,), anomaly=AnomalyKind.MALFORMED_TIMESTAMP)

    factory = factory or _DEFAULT_FACTORY
    login_time = session.login_time

    decisions = [
        factory.for_entry(login_time=login_time, config=config).decide_entry(login_time=login_time, config=config)
    ]
    anomaly = None

    if session.logout_time is not None:
        if session.has_valid_ordering:
            strategy = factory.for_exit(login_time=login_time, logout_time=session.logout_time, config=config)
            decisions.append(strategy.decide_exit(logout_time=session.logout_time, config=config))
        else:
            anomaly = AnomalyKind.INVALID_TIME_ORDERING

    tags = tuple(d.tag for d in decisions) or (StatusTag.IN_PROGRESS,)
    notes = tuple(d.note for d in decisions if d.note)
    return Classification(tags=tags, anomaly=anomaly, notes=notes)


def classify(session: AttendanceSession, config: OfficeHoursConfig) -> list[StatusTag]:
    return list(decide(session, config).tags)
