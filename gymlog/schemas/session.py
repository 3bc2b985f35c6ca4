"""Session, queue and set schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gymlog.core.enums import BodyFocus, PlanMode, SessionExerciseStatus
from gymlog.schemas.suggestion import NextTimeSuggestion


class SessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    started_at: datetime
    ended_at: datetime | None = None
    mode: PlanMode
    template_id: UUID | None = None
    focus: BodyFocus | None = None
    name: str
    planned_exercise_ids: list[UUID] = []


class SessionExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    session_id: UUID
    exercise_id: UUID
    order_index: int
    status: SessionExerciseStatus
    deferred_count: int
    updated_at: datetime


class SessionQueueRead(BaseModel):
    """Derived view: full ordered queue, the current row and what follows it."""

    rows: list[SessionExerciseRead]
    current: SessionExerciseRead | None = None
    up_next: list[SessionExerciseRead] = []
    is_finished: bool


class SessionReorder(BaseModel):
    to_index: int = Field(..., ge=0)


class SessionSetCreate(BaseModel):
    exercise_id: UUID
    reps_completed: float = 0
    weight: float = 0
    missed_reps: float = 0
    rest_seconds_before: int | None = Field(None, ge=0)


class IntentionalMissUpdate(BaseModel):
    intentional: bool


class SessionSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    session_id: UUID
    exercise_id: UUID
    set_index: int
    created_at: datetime
    completed_at: datetime | None = None
    reps_completed: int
    weight: float
    missed_reps: int
    intentional_miss: bool | None = None
    rest_seconds_before: int | None = None


class ExerciseSummary(BaseModel):
    exercise_id: UUID
    status: SessionExerciseStatus
    sets: list[SessionSetRead] = []
    next_time: NextTimeSuggestion | None = None


class SessionSummaryRead(BaseModel):
    session: SessionRead
    exercises: list[ExerciseSummary] = []
