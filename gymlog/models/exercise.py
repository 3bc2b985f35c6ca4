"""Exercise model - catalog entry with aliases, muscle tags and precomputed search keys."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from gymlog.core.enums import ExerciseType
from gymlog.db.base import Base, JSONList, utcnow
from gymlog.services.normalize import normalize_name


class Exercise(Base):
    """Exercise definition. Normalized name/aliases are kept in sync by the validators below."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    aliases: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    normalized_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    normalized_aliases: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    type: Mapped[ExerciseType] = mapped_column(
        Enum(ExerciseType), default=ExerciseType.OTHER, nullable=False
    )
    primary_muscles: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    secondary_muscles: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    equipment: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_urls: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    video_urls: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    template_entries: Mapped[list["TemplateExercise"]] = relationship(
        "TemplateExercise", back_populates="exercise", cascade="all, delete-orphan"
    )

    @validates("name")
    def _sync_normalized_name(self, key: str, value: str) -> str:
        value = value.strip()
        self.normalized_name = normalize_name(value)
        return value

    @validates("aliases")
    def _sync_normalized_aliases(self, key: str, value: list[str]) -> list[str]:
        value = [a.strip() for a in value if a and a.strip()]
        self.normalized_aliases = [normalize_name(a) for a in value]
        return value

    @property
    def muscles(self) -> list[str]:
        """Primary then secondary muscle tags, case-folded."""
        return [m.lower() for m in [*self.primary_muscles, *self.secondary_muscles]]

    def matches_query(self, normalized_query: str) -> bool:
        if normalized_query in self.normalized_name:
            return True
        return any(normalized_query in a for a in self.normalized_aliases)
