"""Workout template schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WorkoutTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class WorkoutTemplateCreate(WorkoutTemplateBase):
    exercise_ids: list[UUID]


class WorkoutTemplateUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    exercise_ids: list[UUID] | None = None


class WorkoutTemplateRead(WorkoutTemplateBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime
    updated_at: datetime
    exercise_ids: list[UUID] = []
