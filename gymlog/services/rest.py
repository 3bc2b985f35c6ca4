"""Rest timer suggestions."""

from gymlog.core.constants import (
    REST_AFTER_MISSED_REPS,
    REST_COMPOUND,
    REST_DEFAULT,
    REST_ISOLATION,
)
from gymlog.core.enums import ExerciseType


def suggest_rest_seconds(exercise_type: ExerciseType | None, had_missed_reps: bool) -> int:
    """Seconds to rest after a set: longer after missed reps, then by movement type."""
    if had_missed_reps:
        return REST_AFTER_MISSED_REPS
    if exercise_type == ExerciseType.COMPOUND:
        return REST_COMPOUND
    if exercise_type == ExerciseType.ISOLATION:
        return REST_ISOLATION
    return REST_DEFAULT


def format_seconds(total: float) -> str:
    s = max(0, int(total))
    return f"{s // 60}:{s % 60:02d}"
