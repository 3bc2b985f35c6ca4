"""Shared enums for models and API."""

from enum import Enum


class ExerciseType(str, Enum):
    """Movement type; drives default rep targets and rest."""

    COMPOUND = "compound"
    ISOLATION = "isolation"
    CARDIO = "cardio"
    OTHER = "other"


class PlanMode(str, Enum):
    """How a plan's exercise list was sourced."""

    TEMPLATE = "template"
    FOCUS = "focus"
    SUGGESTED = "suggested"
    QUICKPICK = "quickpick"


class BodyFocus(str, Enum):
    """Coarse muscle-group targeting."""

    UPPER = "upper"
    LOWER = "lower"


class SessionExerciseStatus(str, Enum):
    """Queue row status. Only PENDING can transition out."""

    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"
