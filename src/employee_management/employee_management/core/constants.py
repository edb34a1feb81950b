"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LEAVE_BALANCE = 24
DEFAULT_WORKING_DAYS = 22

HOURS_PER_DAY = 8
OVERTIME_MULTIPLIER = 1.5
HALF_DAY_FACTOR = 0.5

ADMIN_RECIPIENT = "admin"
ADMIN_DISPLAY_NAME = "Administrator"

MIN_PASSWORD_LENGTH = 6
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_LIST_LIMIT = 200
