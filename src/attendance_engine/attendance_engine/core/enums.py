from __future__ import annotations

from enum import Enum


class StatusTag(str, Enum):
    """Status tags derived for one session (entry side and exit side)."""

    EARLY_ENTRY = "EarlyEntry"
    GOOD_ENTRY = "GoodEntry"
    LATE = "Late"
    EARLY_LEAVE = "EarlyLeave"
    GOOD_EXIT = "GoodExit"
    OVERTIME = "Overtime"
    IN_PROGRESS = "InProgress"
    INVALID_TIME = "InvalidTime"


class AnomalyKind(str, Enum):
    """Data anomalies reported to the caller instead of being raised."""

    INVALID_TIME_ORDERING = "InvalidTimeOrdering"
    MALFORMED_TIMESTAMP = "MalformedTimestamp"
    MULTIPLE_OPEN_SESSIONS = "MultipleOpenSessionsForSubjectToday"


class WarningKind(str, Enum):
    UNCLOSED_SESSION = "UnclosedSession"
    EXCESSIVE_LATENESS = "ExcessiveLateness"
    EXCESSIVE_EARLY_LEAVE = "ExcessiveEarlyLeave"


class AlertType(str, Enum):
    LATE_ARRIVAL = "LATE_ARRIVAL"
    EARLY_DEPARTURE = "EARLY_DEPARTURE"
    UNDERTIME = "UNDERTIME"
    INVALID_TIME = "INVALID_TIME"


class Severity(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
