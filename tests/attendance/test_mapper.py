from datetime import datetime, timedelta, timezone

import pytest

from src.attendance_engine.attendance_engine.attendance.mapper import session_from_row, session_to_dict
from src.attendance_engine.attendance_engine.core.exceptions import ValidationError


def test_row_with_datetimes():
    row = {
        "session_id": "abc",
        "subject_id": "alice",
        "login_time": datetime(2024, 6, 3, 9, 0),
        "logout_time": None,
    }

    session = session_from_row(row)

    assert session.session_id == "abc"
    assert session.login_time == datetime(2024, 6, 3, 9, 0)
    assert session.is_open


def test_exported_row_with_iso_strings():
    row = {"id": "1", "email": "a@corp.test", "login_time": "2024-01-10T10:00:00Z", "logout_time": "2024-01-10T19:00:00+05:00"}

    session = session_from_row(row)

    assert session.subject_id == "a@corp.test"
    assert session.login_time == datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)
    assert session.logout_time.utcoffset() == timedelta(hours=5)


@pytest.mark.parametrize(
    "login, logout",
    [
        (None, None),
        ("not a date", None),
        ("2024-01-10T10:00:00", "garbage"),
    ],
)
def test_unreadable_timestamps_flag_the_row(login, logout):
    session = session_from_row({"id": "1", "subject_id": "alice", "login_time": login, "logout_time": logout})

    assert session.login_time is None
    assert not session.has_valid_login


def test_row_without_identity_is_rejected():
    with pytest.raises(ValidationError):
        session_from_row({"login_time": "2024-01-10T10:00:00"})


def test_session_to_dict_round_trips_iso_strings():
    session = session_from_row({"id": "1", "subject_id": "alice", "login_time": "2024-01-10T10:00:00"})

    assert session_to_dict(session) == {
        "session_id": "1",
        "subject_id": "alice",
        "login_time": "2024-01-10T10:00:00",
        "logout_time": None,
    }
