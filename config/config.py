import os


def _int(name: str, default: int) -> int:
    return int(os.environ.get(name, str(default)))


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.environ.get("DB_HOST", "localhost"),
        "port": _int("DB_PORT", 3306),
        "user": os.environ.get("DB_USER", "root"),
        "password": os.environ.get("DB_PASSWORD", default_password),
        "database": os.environ.get("DB_NAME", "attendance_db"),
    }


def office_hours() -> dict:
    """Office-hour boundaries; defaults describe a 10:00-19:00 day."""
    return {
        "start_hour": _int("OFFICE_START_HOUR", 10),
        "end_hour": _int("OFFICE_END_HOUR", 19),
        "grace_period_minutes": _int("GRACE_PERIOD_MINUTES", 0),
        "early_entry_lead_minutes": _int("EARLY_ENTRY_LEAD_MINUTES", 30),
        "exit_grace_minutes": _int("EXIT_GRACE_MINUTES", 30),
        "min_work_hours": float(os.environ.get("MIN_WORK_HOURS", "9")),
    }


RETENTION_DAYS = _int("RETENTION_DAYS", 90)
COMPLIANCE_WINDOW_DAYS = _int("COMPLIANCE_WINDOW_DAYS", 7)
COMPLIANCE_THRESHOLD = _int("COMPLIANCE_THRESHOLD", 3)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
