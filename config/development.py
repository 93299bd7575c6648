import os

from .config import COMPLIANCE_THRESHOLD, COMPLIANCE_WINDOW_DAYS, RETENTION_DAYS, db_config, office_hours

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config()
OFFICE_HOURS = office_hours()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
