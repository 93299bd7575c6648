from __future__ import annotations

from datetime import date, datetime

from src.attendance_engine.attendance_engine.attendance.alerts import alerts_for_session, generate_alerts
from src.attendance_engine.attendance_engine.core.enums import AlertType, Severity
from tests.conftest import make_session


def test_late_arrival_alert(office_hours):
    session = make_session("s1", datetime(2024, 6, 3, 10, 30), datetime(2024, 6, 3, 19, 40))

    alerts = alerts_for_session(session, office_hours)

    assert [a.type for a in alerts] == [AlertType.LATE_ARRIVAL]
    assert alerts[0].alert_id == "s1-late"
    assert alerts[0].severity == Severity.MEDIUM
    assert alerts[0].date == date(2024, 6, 3)
    assert "clocked in late at 10:30" in alerts[0].message


def test_early_departure_and_undertime(office_hours):
    session = make_session("s1", datetime(2024, 6, 3, 9, 45), datetime(2024, 6, 3, 17, 0))

    alerts = alerts_for_session(session, office_hours)

    assert [a.type for a in alerts] == [AlertType.EARLY_DEPARTURE, AlertType.UNDERTIME]
    assert alerts[1].severity == Severity.HIGH
    assert "less than 9h" in alerts[1].message


def test_open_session_on_time_has_no_alerts(office_hours):
    assert alerts_for_session(make_session("s1", datetime(2024, 6, 3, 9, 45)), office_hours) == []


def test_invalid_ordering_alert_without_undertime(office_hours):
    session = make_session("s1", datetime(2024, 6, 3, 10, 0), datetime(2024, 6, 3, 9, 0))

    alerts = alerts_for_session(session, office_hours)

    assert [(a.type, a.severity) for a in alerts] == [(AlertType.INVALID_TIME, Severity.HIGH)]


def test_malformed_session_gets_single_invalid_alert(office_hours):
    alerts = alerts_for_session(make_session("s1", None), office_hours)

    assert [a.type for a in alerts] == [AlertType.INVALID_TIME]
    assert alerts[0].date is None


def test_generate_alerts_uses_display_names(office_hours):
    sessions = [
        make_session("a1", datetime(2024, 6, 3, 10, 15), datetime(2024, 6, 3, 19, 45)),
        make_session("b1", datetime(2024, 6, 3, 9, 50), datetime(2024, 6, 3, 19, 0), subject="bob"),
    ]

    alerts = generate_alerts(sessions, office_hours, names={"alice": "Alice Smith"})

    assert [a.session_id for a in alerts] == ["a1"]
    assert alerts[0].message.startswith("Alice Smith ")
