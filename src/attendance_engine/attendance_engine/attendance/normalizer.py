"""Session normalizer.

Turns raw attendance rows (any order, possibly with stale open sessions) into
the canonical view used for classification and display:

1. stale open sessions (logged in on a day before ``as_of``) are closed at the
   end of their login day and returned as corrections for the caller to store;
2. sessions at or beyond the retention horizon are dropped;
3. per subject, the earliest open session of the ``as_of`` day is the active
   one; any further open sessions of that day are withheld and reported.

Nothing here reads the clock or touches storage.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from functools import cmp_to_key
from typing import Iterable

from ..common.datetime_utils import comparable, end_of_day, local_day
from ..core.constants import DEFAULT_RETENTION_DAYS
from ..core.enums import AnomalyKind
from .model import Anomaly, AttendanceSession, NormalizedResult, SessionCorrection

logger = logging.getLogger(__name__)


def _compare_login(a: AttendanceSession, b: AttendanceSession) -> int:
    left, right = comparable(a.login_time, b.login_time)
    return (left > right) - (left < right)


by_login = cmp_to_key(_compare_login)


def _is_after(value: datetime, reference: datetime) -> bool:
    left, right = comparable(value, reference)
    return left > right


def _report(anomalies: list[Anomaly], anomaly: Anomaly) -> None:
    logger.warning("%s: %s", anomaly.kind.value, anomaly.message)
    anomalies.append(anomaly)


def normalize(
    raw_sessions: Iterable[AttendanceSession],
    as_of: datetime,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> NormalizedResult:
    today = local_day(as_of)
    cutoff = as_of - timedelta(days=int(retention_days))

    anomalies: list[Anomaly] = []
    corrections: list[SessionCorrection] = []
    retained: list[AttendanceSession] = []

    for session in raw_sessions:
        if not session.has_valid_login:
            _report(
                anomalies,
                Anomaly(
                    kind=AnomalyKind.MALFORMED_TIMESTAMP,
                    subject_id=session.subject_id,
                    session_ids=(session.session_id,),
                    message=f"Session {session.session_id} has a missing or unparseable timestamp",
                ),
            )
            continue

        if session.is_open and local_day(session.login_time) < today:
            closed_at = end_of_day(session.login_time)
            logger.debug("Auto-closing session %s at %s", session.session_id, closed_at.isoformat())
            session = session.closed_at(closed_at)
            corrections.append(
                SessionCorrection(session_id=session.session_id, subject_id=session.subject_id, logout_time=closed_at)
            )

        if not _is_after(session.login_time, cutoff):
            continue

        if not session.has_valid_ordering:
            _report(
                anomalies,
                Anomaly(
                    kind=AnomalyKind.INVALID_TIME_ORDERING,
                    subject_id=session.subject_id,
                    session_ids=(session.session_id,),
                    message=f"Session {session.session_id} logs out before it logs in",
                ),
            )

        retained.append(session)

    open_today: dict[str, list[AttendanceSession]] = {}
    for session in sorted(retained, key=by_login):
        if session.is_open and local_day(session.login_time) == today:
            open_today.setdefault(session.subject_id, []).append(session)

    active_session_ids: dict[str, str] = {}
    withheld: set[str] = set()
    for subject_id, candidates in open_today.items():
        active, extra = candidates[0], candidates[1:]
        active_session_ids[subject_id] = active.session_id
        if extra:
            withheld.update(s.session_id for s in extra)
            _report(
                anomalies,
                Anomaly(
                    kind=AnomalyKind.MULTIPLE_OPEN_SESSIONS,
                    subject_id=subject_id,
                    session_ids=tuple(s.session_id for s in extra),
                    message=(
                        f"Subject {subject_id} has {len(candidates)} open sessions today; "
                        f"keeping {active.session_id}"
                    ),
                ),
            )

    sessions = sorted((s for s in retained if s.session_id not in withheld), key=by_login, reverse=True)
    return NormalizedResult(
        sessions=sessions,
        active_session_ids=active_session_ids,
        corrections=corrections,
        anomalies=anomalies,
    )
