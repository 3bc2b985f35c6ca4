"""Plan schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gymlog.core.enums import BodyFocus, PlanMode


class PlanFromTemplate(BaseModel):
    template_id: UUID


class PlanFromFocus(BaseModel):
    focus: BodyFocus


class PlanQuickPick(BaseModel):
    name: str = ""
    exercise_ids: list[UUID]


class PlanUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    exercise_ids: list[UUID] | None = None


class PlanReorder(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class PlanRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime
    mode: PlanMode
    name: str
    template_id: UUID | None = None
    focus: BodyFocus | None = None
    exercise_ids: list[UUID] = []
