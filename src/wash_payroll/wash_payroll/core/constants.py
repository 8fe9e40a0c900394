"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_BUSINESS_TIMEZONE = "Asia/Dubai"

# Mall allowance is prorated over a fixed 30-day month.
MALL_ALLOWANCE_MONTH_DAYS = 30
DEFAULT_MALL_DAYS_WORKED = 30

DEFAULT_CAMP_ROLE = "helper"
DEFAULT_OUTSIDE_POSITION = "helper"

DEFAULT_PREPARED_BY = "Admin"
SYSTEM_USER = "System"

DEFAULT_SLIP_LIST_LIMIT = 500
DEFAULT_SETTINGS_HISTORY_LIMIT = 20
