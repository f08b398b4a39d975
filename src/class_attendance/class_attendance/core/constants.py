"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ATTENDANCE_TOKEN_KIND = "attendance"

# Calendar date key, e.g. "Mon Jan 01 2024". Part of the stored data format.
DATE_KEY_FORMAT = "%a %b %d %Y"
# Human-readable mark time, e.g. "01/01/2024, 09:15:00 AM".
MARKED_AT_FORMAT = "%m/%d/%Y, %I:%M:%S %p"

STORE_KEY_PREFIX = "attendance-"

DEFAULT_REPORT_WINDOW_DAYS = 30
RECENT_RECORDS_LIMIT = 10

GOOD_ATTENDANCE_PERCENT = 75
WARNING_ATTENDANCE_PERCENT = 50
