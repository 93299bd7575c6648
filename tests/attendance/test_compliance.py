from __future__ import annotations

from datetime import datetime

from src.attendance_engine.attendance_engine.attendance.compliance import evaluate
from src.attendance_engine.attendance_engine.core.enums import WarningKind
from tests.conftest import NOW, make_session


def late_day(day: int, subject: str = "alice"):
    return make_session(f"{subject}-late-{day}", datetime(2024, 6, day, 10, 30), datetime(2024, 6, day, 19, 10), subject)


def early_leave_day(day: int, subject: str = "alice"):
    return make_session(f"{subject}-early-{day}", datetime(2024, 6, day, 9, 45), datetime(2024, 6, day, 17, 0), subject)


def test_three_late_sessions_emit_lateness_warning_only(office_hours):
    sessions = [late_day(8), late_day(9), late_day(10)]

    warnings = evaluate(sessions, NOW, office_hours)

    assert [w.kind for w in warnings] == [WarningKind.EXCESSIVE_LATENESS]
    assert warnings[0].count == 3
    assert "3" in warnings[0].message
    assert warnings[0].subject_id == "alice"
    assert warnings[0].window_start == datetime(2024, 6, 3, 20, 0)
    assert warnings[0].window_end == NOW


def test_below_threshold_emits_nothing(office_hours):
    assert evaluate([late_day(9), late_day(10)], NOW, office_hours) == []


def test_sessions_outside_window_are_not_counted(office_hours):
    sessions = [late_day(3), late_day(9), late_day(10)]

    assert evaluate(sessions, NOW, office_hours) == []


def test_three_early_leaves_emit_early_leave_warning(office_hours):
    sessions = [early_leave_day(5), early_leave_day(6), early_leave_day(7)]

    warnings = evaluate(sessions, NOW, office_hours)

    assert [w.kind for w in warnings] == [WarningKind.EXCESSIVE_EARLY_LEAVE]
    assert warnings[0].count == 3


def test_unclosed_previous_day_sessions_are_reported(office_hours):
    stale = make_session("stale", datetime(2024, 6, 8, 9, 45))
    today = make_session("today", datetime(2024, 6, 10, 9, 45))

    warnings = evaluate([stale, today], NOW, office_hours)

    assert [(w.kind, w.count) for w in warnings] == [(WarningKind.UNCLOSED_SESSION, 1)]


def test_every_condition_is_represented(office_hours):
    both = [
        make_session(f"b{d}", datetime(2024, 6, d, 10, 30), datetime(2024, 6, d, 17, 0))
        for d in (5, 6, 7)
    ]
    stale = make_session("stale", datetime(2024, 6, 1, 9, 0))

    kinds = {w.kind for w in evaluate(both + [stale], NOW, office_hours)}

    assert kinds == {
        WarningKind.EXCESSIVE_LATENESS,
        WarningKind.EXCESSIVE_EARLY_LEAVE,
        WarningKind.UNCLOSED_SESSION,
    }


def test_warnings_are_computed_per_subject(office_hours):
    sessions = [late_day(d, "alice") for d in (8, 9, 10)] + [late_day(d, "bob") for d in (9, 10)]

    warnings = evaluate(sessions, NOW, office_hours)

    assert [(w.subject_id, w.kind) for w in warnings] == [("alice", WarningKind.EXCESSIVE_LATENESS)]


def test_window_and_threshold_are_configurable(office_hours):
    sessions = [late_day(1), late_day(10)]

    warnings = evaluate(sessions, NOW, office_hours, window_days=14, threshold=2)

    assert [w.kind for w in warnings] == [WarningKind.EXCESSIVE_LATENESS]
    assert warnings[0].window_start == datetime(2024, 5, 27, 20, 0)


def test_malformed_sessions_are_ignored(office_hours):
    assert evaluate([make_session("x", None)], NOW, office_hours) == []
