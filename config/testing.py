import os

from .config import COMPLIANCE_THRESHOLD, COMPLIANCE_WINDOW_DAYS, RETENTION_DAYS, db_config, office_hours

SECRET_KEY = "test-secret"

DB_CONFIG = db_config()
OFFICE_HOURS = office_hours()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
