"""Exercise schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gymlog.core.enums import ExerciseType


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    aliases: list[str] = []
    category: str | None = Field(None, max_length=100)
    type: ExerciseType = ExerciseType.OTHER
    primary_muscles: list[str] = []
    secondary_muscles: list[str] = []
    equipment: list[str] = []
    instructions: str | None = None
    image_urls: list[str] = []
    video_urls: list[str] = []


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    aliases: list[str] | None = None
    category: str | None = None
    type: ExerciseType | None = None
    primary_muscles: list[str] | None = None
    secondary_muscles: list[str] | None = None
    equipment: list[str] | None = None
    instructions: str | None = None
    image_urls: list[str] | None = None
    video_urls: list[str] | None = None


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    normalized_name: str
    normalized_aliases: list[str] = []
    is_custom: bool
    created_at: datetime
    updated_at: datetime


class ExerciseRef(BaseModel):
    """Minimal exercise info for embedding in queue/set responses."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    type: ExerciseType
