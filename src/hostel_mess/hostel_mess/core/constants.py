"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LEAVE_MIN_NOTICE_DAYS = 1
DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_HISTORY_LIMIT = 200
PENDING_QUEUE_LIMIT = 500

MONTH_YEAR_FORMAT = "%m-%Y"
