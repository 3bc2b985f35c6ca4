"""Advisor outputs: start weight, next-time adjustment, rest, last performance."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

NextTimeAction = Literal["increase", "decrease", "keep"]


class LastPerformance(BaseModel):
    """Most recent completed set for an exercise."""

    last_completed_at: datetime
    last_weight: float
    last_reps: int
    last_rest_seconds: int | None = None


class StartSuggestion(BaseModel):
    weight: float
    reps_target: int
    note: str | None = None


class NextTimeSuggestion(BaseModel):
    weight: float
    action: NextTimeAction
    note: str


class RestSuggestion(BaseModel):
    seconds: int
    formatted: str
