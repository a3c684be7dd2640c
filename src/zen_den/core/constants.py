"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

RECENT_STAFF_KEY = "zen_den_recent_staff"
RECENT_STAFF_LIMIT = 10

FREQUENT_VISITOR_DAYS = 30
FREQUENT_VISITOR_MIN_VISITS = 3

DURATION_REFRESH_SECONDS = 60
MORNING_CUTOFF_HOUR = 12

EXPORT_FILENAME_PREFIX = "zen-den-visits"
