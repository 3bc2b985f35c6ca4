"""Plan model - staging list of exercises for a not-yet-started session."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gymlog.core.enums import BodyFocus, PlanMode
from gymlog.db.base import Base, JSONList, utcnow


class Plan(Base):
    """Mutable pre-session list. Always assign a new list to exercise_ids (JSON is not change-tracked)."""

    __tablename__ = "plans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    mode: Mapped[PlanMode] = mapped_column(Enum(PlanMode), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    template_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workout_templates.id", ondelete="SET NULL"), nullable=True
    )
    focus: Mapped[BodyFocus | None] = mapped_column(Enum(BodyFocus), nullable=True)
    # Stored as strings; use planned_ids for UUIDs
    exercise_ids: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    @property
    def planned_ids(self) -> list[uuid.UUID]:
        return [uuid.UUID(i) for i in self.exercise_ids]
