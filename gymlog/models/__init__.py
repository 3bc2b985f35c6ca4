"""ORM models - import all so Base.metadata is complete for migrations."""

from gymlog.models.exercise import Exercise
from gymlog.models.plan import Plan
from gymlog.models.session import SessionExercise, SessionSet, WorkoutSession
from gymlog.models.template import TemplateExercise, WorkoutTemplate

__all__ = [
    "Exercise",
    "Plan",
    "SessionExercise",
    "SessionSet",
    "WorkoutSession",
    "WorkoutTemplate",
    "TemplateExercise",
]
