"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_START_HOUR = 10
DEFAULT_END_HOUR = 19
DEFAULT_GRACE_PERIOD_MINUTES = 0
DEFAULT_EARLY_ENTRY_LEAD_MINUTES = 30
# A logout up to 30 min after closing is a GoodExit; set 0 to tag any later logout Overtime.
DEFAULT_EXIT_GRACE_MINUTES = 30
DEFAULT_MIN_WORK_HOURS = 9

DEFAULT_RETENTION_DAYS = 90
DEFAULT_COMPLIANCE_WINDOW_DAYS = 7
DEFAULT_COMPLIANCE_THRESHOLD = 3
DEFAULT_AUDIT_DAYS = 30
