"""Session, SessionExercise and SessionSet models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gymlog.core.enums import BodyFocus, PlanMode, SessionExerciseStatus
from gymlog.db.base import Base, JSONList, utcnow

ACTIVE_SLOT = 1


class WorkoutSession(Base):
    """A started workout. planned_exercise_ids is a snapshot taken at start and never edited.

    active_slot is ACTIVE_SLOT while ended_at is NULL and NULL afterwards; its UNIQUE
    constraint makes a second active session impossible at insert time.
    """

    __tablename__ = "sessions"
    __table_args__ = (Index("ix_sessions_started_at", "started_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    active_slot: Mapped[int | None] = mapped_column(Integer, nullable=True, unique=True)

    mode: Mapped[PlanMode] = mapped_column(Enum(PlanMode), nullable=False)
    template_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workout_templates.id", ondelete="SET NULL"), nullable=True, index=True
    )
    focus: Mapped[BodyFocus | None] = mapped_column(Enum(BodyFocus), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    planned_exercise_ids: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    exercises: Mapped[list["SessionExercise"]] = relationship(
        "SessionExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionExercise.order_index",
    )
    sets: Mapped[list["SessionSet"]] = relationship(
        "SessionSet", back_populates="session", cascade="all, delete-orphan"
    )

    @property
    def is_active(self) -> bool:
        return self.ended_at is None


class SessionExercise(Base):
    """One queue row per planned exercise. order_index is the queue position."""

    __tablename__ = "session_exercises"
    __table_args__ = (
        Index("ix_session_exercises_session_order", "session_id", "order_index"),
        Index("ix_session_exercises_session_exercise", "session_id", "exercise_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[SessionExerciseStatus] = mapped_column(
        Enum(SessionExerciseStatus), default=SessionExerciseStatus.PENDING, nullable=False, index=True
    )
    deferred_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="exercises")

    @property
    def is_pending(self) -> bool:
        return self.status == SessionExerciseStatus.PENDING


class SessionSet(Base):
    """One logged set. Append-only; set_index counts earlier sets of the same exercise in the session."""

    __tablename__ = "session_sets"
    __table_args__ = (
        Index("ix_session_sets_session_exercise", "session_id", "exercise_id"),
        Index("ix_session_sets_exercise_completed", "exercise_id", "completed_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    set_index: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    reps_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    weight: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    missed_reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    intentional_miss: Mapped[bool | None] = mapped_column(Boolean, nullable=True)  # unknown until marked
    rest_seconds_before: Mapped[int | None] = mapped_column(Integer, nullable=True)

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="sets")
