import os

from .config import COMPLIANCE_THRESHOLD, COMPLIANCE_WINDOW_DAYS, LOG_LEVEL, RETENTION_DAYS, db_config, office_hours

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()
OFFICE_HOURS = office_hours()

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
