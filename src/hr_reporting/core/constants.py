"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NOT_AVAILABLE = "N/A"
EMPTY_CELL = "-"
ZERO_PERCENT = "0%"

ALL_PROJECTS = "All Projects"
ALL_DESIGNATIONS = "All Designations"
ALL_STATUSES = "All Statuses"

TOAST_SECONDS = 3.5

FULL_DAY_HOURS = 7.0
HALF_DAY_HOURS = 4.5

DEFAULT_API_TIMEOUT = 20
