"""Constants and defaults.

Note: the pay policy fallbacks below are applied by the settings service before the
payroll engine runs; the engine itself never fills in missing policy.
"""

from decimal import Decimal

MINUTES_PER_DAY = 24 * 60

DEFAULT_HOURLY_WAGE = Decimal("1100")

DEFAULT_NIGHT_PREMIUM_RATE = Decimal("0.25")
DEFAULT_NIGHT_START = "22:00"
DEFAULT_NIGHT_END = "05:00"

DEFAULT_OVERTIME_PREMIUM_RATE = Decimal("0.25")
DEFAULT_OVERTIME_THRESHOLD_MINUTES = 480

DEFAULT_HOLIDAY_PREMIUM_RATE = Decimal("0.35")
DEFAULT_HOLIDAY_INCLUDES_WEEKEND = True

DEFAULT_TRANSPORT_PER_SHIFT = Decimal("0")

DEFAULT_SUBMISSION_MIN_DAYS_BEFORE = 3

MAX_PREMIUM_RATE = Decimal("2")
MAX_SUBMISSION_MIN_DAYS_BEFORE = 365

DEFAULT_HOLIDAY_COUNTRY = "JP"
