"""Application constants"""

# Persistence
STORAGE_KEY = "grade_goal_calc_multicourse_v1"

# Course defaults
DEFAULT_COURSE_NAME = "New Course"
DEFAULT_TARGET = 50
DEFAULT_ITEM_NAMES = ("A1S1", "A2S1", "A1S2", "A2S2", "AF1", "AF2")
COPY_SUFFIX = " (Copy)"

# Seed course shown on first run: item name -> (weight, score)
SEED_COURSE_NAME = "Man Acc 288"
SEED_ITEM_VALUES = {
    "A1S1": (10, 47),
    "A2S1": (10, 60),
    "A1S2": (10, 38),
    "A2S2": (20, None),
    "AF1": (25, 95),
    "AF2": (25, 90),
}

# Percentage bounds for weights, scores and targets
MIN_PERCENT = 0.0
MAX_PERCENT = 100.0

# Export file names
EXPORT_ALL_FILENAME = "all-courses.json"
FALLBACK_EXPORT_NAME = "course"

# Theme colors
PRIMARY_COLOR = "#f97316"
SUCCESS_COLOR = "#10b981"
ERROR_COLOR = "#ef4444"
