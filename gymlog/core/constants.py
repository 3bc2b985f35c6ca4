"""Application constants."""

# Minimum exercises for a template, plan or session
MIN_EXERCISES_PER_WORKOUT = 4

# Plan assembly
PLAN_TARGET_SIZE = 5
RECENT_HISTORY_LIMIT = 50

UPPER_BODY_MUSCLES = frozenset(
    {
        "chest",
        "back",
        "shoulders",
        "biceps",
        "triceps",
        "forearms",
        "rear delts",
        "upper chest",
        "core",
        "abs",
    }
)
LOWER_BODY_MUSCLES = frozenset({"quadriceps", "hamstrings", "glutes", "calves", "adductors"})

# Progression
STALE_AFTER_DAYS = 21
STALE_DELOAD_FACTOR = 0.92
MISSED_REPS_DELOAD_FACTOR = 0.95
HEAVY_WEIGHT_THRESHOLD = 80
SMALL_INCREMENT = 2.5
LARGE_INCREMENT = 5

# Rest (seconds)
REST_AFTER_MISSED_REPS = 180
REST_COMPOUND = 150
REST_ISOLATION = 90
REST_DEFAULT = 120

# Default plan names per mode
QUICK_PICK_PLAN_NAME = "Quick pick"
SUGGESTED_PLAN_NAME = "Suggested"
