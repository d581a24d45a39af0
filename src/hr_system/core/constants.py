"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

LEAVE_DAYS_PER_YEAR = 14
SGK_RATE = Decimal("0.14")
DEFAULT_TIMEZONE = "Europe/Istanbul"

# lower_bound:rate pairs, overridable through the TAX_BRACKETS setting
DEFAULT_TAX_BRACKETS = "0:0.15,110000:0.20,230000:0.27,870000:0.35"

DEFAULT_LIST_LIMIT = 200
