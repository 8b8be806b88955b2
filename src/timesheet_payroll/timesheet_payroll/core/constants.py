"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date
from decimal import Decimal

INCOME_TAX_RATE = Decimal("0.03")
LOCAL_TAX_RATE = Decimal("0.003")

DEFAULT_HOURLY_WAGE = 10000
DAYS_PER_MONTH = 30

# Clock-in/out are time-of-day only; both sides are placed on this date.
REFERENCE_DATE = date(2024, 1, 1)

ACTIVE_WINDOW_DAYS = 7
DEFAULT_HISTORY_LIMIT = 200
BANNER_ANNOUNCEMENT_LIMIT = 5
DEFAULT_DAY_OFF_REASON = "No reason given"
