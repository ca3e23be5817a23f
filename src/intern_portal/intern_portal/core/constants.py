"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PRESENTED_IDS_KEY = "presentation_presented_ids"

MIN_DURATION_SECONDS = 5
DEFAULT_DURATION_SECONDS = 30

WARNING_THRESHOLD_SECONDS = 30
LOW_TIME_THRESHOLD_SECONDS = 10
TICK_INTERVAL_SECONDS = 1.0

UPCOMING_PREVIEW_LIMIT = 12

DEFAULT_DIRECTORY_TTL_SECONDS = 60

POSITION_GROUPS = {
    "dev": ("Fullstack Engineer Intern", "UI/UX Engineer Intern"),
}
