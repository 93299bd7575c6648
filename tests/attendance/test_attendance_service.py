from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.attendance_engine.attendance_engine.attendance.service import AttendanceService
from src.attendance_engine.attendance_engine.core.enums import AlertType, WarningKind
from src.attendance_engine.attendance_engine.core.exceptions import NotFoundError, ValidationError
from tests.conftest import NOW, InMemoryAttendance, make_session


def build(sessions=(), **kwargs):
    repo = InMemoryAttendance(sessions)
    return repo, AttendanceService(repo, clock=lambda: NOW, **kwargs)


def test_clock_in_then_clock_out():
    repo, svc = build()
    morning = datetime(2024, 6, 10, 9, 50)

    created = svc.clock_in("alice", now=morning)
    closed = svc.clock_out("alice", now=datetime(2024, 6, 10, 19, 5))

    assert repo.get(created.session_id).logout_time == datetime(2024, 6, 10, 19, 5)
    assert closed.session_id == created.session_id


def test_double_clock_in_is_rejected():
    _, svc = build()
    svc.clock_in("alice", now=datetime(2024, 6, 10, 9, 50))

    with pytest.raises(ValidationError):
        svc.clock_in("alice", now=datetime(2024, 6, 10, 10, 5))


def test_clock_out_without_open_session_is_rejected():
    _, svc = build()

    with pytest.raises(ValidationError):
        svc.clock_out("alice")


def test_blank_subject_is_rejected():
    _, svc = build()

    with pytest.raises(ValidationError):
        svc.clock_in("   ")


def test_clock_in_persists_auto_close_of_forgotten_session():
    forgotten = make_session("old", datetime(2024, 6, 7, 9, 30))
    repo, svc = build([forgotten])

    svc.clock_in("alice", now=datetime(2024, 6, 10, 9, 45))

    assert repo.get("old").logout_time == datetime(2024, 6, 7, 23, 59, 59, 999000)
    assert repo.corrections_applied == 1


def test_session_report_rows():
    sessions = [
        make_session("s1", datetime(2024, 6, 7, 10, 5), datetime(2024, 6, 7, 18, 50)),
        make_session("s2", datetime(2024, 6, 10, 9, 40)),
    ]
    _, svc = build(sessions)

    report = svc.session_report("alice")

    assert report["active_session_id"] == "s2"
    assert [r["session_id"] for r in report["sessions"]] == ["s2", "s1"]
    closed = report["sessions"][1]
    assert closed["tags"] == ["Late", "EarlyLeave"]
    assert closed["duration"] == "08:45:00"
    assert set(closed["alert_types"]) == {"LATE_ARRIVAL", "EARLY_DEPARTURE", "UNDERTIME"}
    assert report["sessions"][0]["duration"] == "In Progress"
    assert report["total_worked_seconds"] == 8 * 3600 + 45 * 60


def test_warnings_report_lateness_and_unclosed_then_close():
    sessions = [
        make_session(f"l{d}", datetime(2024, 6, d, 10, 30), datetime(2024, 6, d, 19, 10)) for d in (5, 6, 7)
    ] + [make_session("stale", datetime(2024, 6, 8, 9, 45))]
    repo, svc = build(sessions)

    kinds = {w.kind for w in svc.warnings("alice")}

    assert kinds == {WarningKind.EXCESSIVE_LATENESS, WarningKind.UNCLOSED_SESSION}
    assert repo.get("stale").logout_time is not None


def test_audit_filters_range_and_alert_type():
    sessions = [
        make_session("late", datetime(2024, 6, 3, 10, 30), datetime(2024, 6, 3, 19, 40)),
        make_session("fine", datetime(2024, 6, 4, 9, 45), datetime(2024, 6, 4, 19, 0)),
        make_session("outside", datetime(2024, 5, 1, 10, 30), datetime(2024, 5, 1, 19, 40)),
        make_session("bob", datetime(2024, 6, 4, 11, 0), datetime(2024, 6, 4, 20, 0), subject="bob"),
    ]
    _, svc = build(sessions)

    everything = svc.audit(start=date(2024, 6, 1), end=date(2024, 6, 10))
    late_only = svc.audit(start=date(2024, 6, 1), end=date(2024, 6, 10), alert_type=AlertType.LATE_ARRIVAL)
    alice_late = svc.audit(
        start=date(2024, 6, 1), end=date(2024, 6, 10), subject_id="alice", alert_type=AlertType.LATE_ARRIVAL
    )

    assert {r["session_id"] for r in everything} == {"late", "fine", "bob"}
    assert {r["session_id"] for r in late_only} == {"late", "bob"}
    assert [r["session_id"] for r in alice_late] == ["late"]


def test_audit_includes_whole_end_day():
    _, svc = build([make_session("evening", datetime(2024, 6, 4, 23, 30), datetime(2024, 6, 4, 23, 45))])

    rows = svc.audit(start=date(2024, 6, 4), end=date(2024, 6, 4))

    assert [r["session_id"] for r in rows] == ["evening"]


def test_audit_rejects_inverted_range():
    _, svc = build()

    with pytest.raises(ValidationError):
        svc.audit(start=date(2024, 6, 10), end=date(2024, 6, 1))


def test_clear_deletes_subject_sessions_only():
    repo, svc = build(
        [
            make_session("a", datetime(2024, 6, 3, 9, 45), datetime(2024, 6, 3, 19, 0)),
            make_session("b", datetime(2024, 6, 3, 9, 45), datetime(2024, 6, 3, 19, 0), subject="bob"),
        ]
    )

    assert svc.clear("alice") == 1
    assert [s.session_id for s in repo.all()] == ["b"]


def test_clock_out_also_closes_withheld_duplicate_sessions():
    repo, svc = build(
        [
            make_session("first", datetime(2024, 6, 10, 9, 0)),
            make_session("dup", datetime(2024, 6, 10, 9, 5)),
        ]
    )
    leaving = datetime(2024, 6, 10, 19, 10)

    closed = svc.clock_out("alice", now=leaving)
    view = svc.load_view("alice", now=leaving)

    assert closed.session_id == "first"
    assert repo.get("dup").logout_time == leaving
    assert view.active_session_ids == {}
    assert view.anomalies == []
    svc.clock_in("alice", now=datetime(2024, 6, 10, 19, 30))


def test_get_session_returns_row_or_raises_not_found():
    _, svc = build([make_session("s1", datetime(2024, 6, 7, 10, 5), datetime(2024, 6, 7, 18, 50))])

    assert svc.get_session("s1")["tags"] == ["Late", "EarlyLeave"]
    with pytest.raises(NotFoundError):
        svc.get_session("missing")


def test_summary_uses_current_view():
    _, svc = build(
        [
            make_session("wed", datetime(2024, 6, 5, 9, 45), datetime(2024, 6, 5, 18, 45)),
            make_session("today", datetime(2024, 6, 10, 10, 30)),
        ]
    )

    summary = svc.summary("alice")

    assert summary.active_session_id == "today"
    assert summary.active_elapsed == timedelta(hours=9, minutes=30)
    assert summary.week_worked == timedelta(hours=9)
    assert summary.month_late == 1
