"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STUDENTS_KEY = "attentrack-students"
ATTENDANCE_KEY = "attentrack-attendance"

DEFAULT_CONNECTION_LIMIT = 10
MAX_CONNECTION_LIMIT = 32
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_POOL_NAME = "attentrack"

DEFAULT_REPORT_DAYS = 7
DEFAULT_RECENT_SESSIONS = 10
