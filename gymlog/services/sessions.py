"""Session state machine: start from a plan, work through the queue, log sets, end.

Queue rows move pending -> completed | skipped and never back. The current exercise is
not stored anywhere; it is the first pending row in order_index order. Services flush but
never commit: the caller's unit of work (get_db / session_scope) commits or rolls back
each operation as a whole.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.core.constants import MIN_EXERCISES_PER_WORKOUT
from gymlog.core.enums import SessionExerciseStatus
from gymlog.core.exceptions import ConflictError, NotFound, ValidationError
from gymlog.db.base import utcnow
from gymlog.models.exercise import Exercise
from gymlog.models.plan import Plan
from gymlog.models.session import ACTIVE_SLOT, SessionExercise, SessionSet, WorkoutSession
from gymlog.schemas.session import (
    ExerciseSummary,
    SessionRead,
    SessionSetRead,
    SessionSummaryRead,
)
from gymlog.services.progression import suggest_next_time

logger = logging.getLogger(__name__)

WORKOUT_IN_PROGRESS = "A workout is already in progress."


@dataclass
class SessionQueue:
    rows: list[SessionExercise]
    current: SessionExercise | None = None
    up_next: list[SessionExercise] = field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        return self.current is None


# --- Lifecycle ---


async def get_active_session(db: AsyncSession) -> WorkoutSession | None:
    """The in-progress session, if any. Always read from the store, never cached."""
    result = await db.execute(
        select(WorkoutSession)
        .where(WorkoutSession.ended_at.is_(None))
        .order_by(WorkoutSession.started_at.desc())
        .limit(1)
    )
    return result.scalars().first()


def _dialect_insert(db: AsyncSession):
    if db.get_bind().dialect.name == "postgresql":
        return pg_insert
    return sqlite_insert


async def start_session_from_plan(db: AsyncSession, plan_id: uuid.UUID) -> WorkoutSession:
    """
    Snapshot the plan into a new session with one pending row per planned exercise.

    The session row is written with INSERT ... ON CONFLICT (active_slot) DO NOTHING,
    so the insert itself is the atomic "only if nothing else is active" check. A racing
    start inserts nothing and gets ConflictError; the caller's transaction stays usable
    and keeps whatever else it has staged.
    """
    plan = await db.get(Plan, plan_id)
    if plan is None:
        raise NotFound("Plan not found")
    if len(plan.exercise_ids) < MIN_EXERCISES_PER_WORKOUT:
        raise ValidationError("Workouts need at least 4 exercises.")

    active = await get_active_session(db)
    if active is not None:
        logger.warning("Refusing to start plan %s: session %s is still active", plan_id, active.id)
        raise ConflictError(WORKOUT_IN_PROGRESS)

    now = utcnow()
    session_id = uuid.uuid4()
    insert = _dialect_insert(db)
    stmt = (
        insert(WorkoutSession.__table__)
        .values(
            id=session_id,
            started_at=now,
            ended_at=None,
            active_slot=ACTIVE_SLOT,
            mode=plan.mode,
            template_id=plan.template_id,
            focus=plan.focus,
            name=plan.name,
            planned_exercise_ids=list(plan.exercise_ids),
        )
        .on_conflict_do_nothing(index_elements=["active_slot"])
    )
    result = await db.execute(stmt)
    if result.rowcount == 0:
        logger.warning("Concurrent start rejected for plan %s", plan_id)
        raise ConflictError(WORKOUT_IN_PROGRESS)

    session = await db.get(WorkoutSession, session_id)
    rows = [
        SessionExercise(
            session_id=session_id,
            exercise_id=exercise_id,
            order_index=i,
            status=SessionExerciseStatus.PENDING,
            deferred_count=0,
            created_at=now,
            updated_at=now,
        )
        for i, exercise_id in enumerate(plan.planned_ids)
    ]
    db.add_all(rows)
    await db.flush()

    logger.info("Started session %s from plan %s (%d exercises)", session_id, plan_id, len(rows))
    return session


async def end_session(db: AsyncSession, session_id: uuid.UUID) -> WorkoutSession | None:
    """Stamp ended_at once. Ending an already-ended session keeps the first end time."""
    session = await db.get(WorkoutSession, session_id)
    if session is None:
        return None
    if session.ended_at is not None:
        return session
    session.ended_at = utcnow()
    session.active_slot = None
    await db.flush()
    logger.info("Ended session %s", session_id)
    return session


async def get_session(db: AsyncSession, session_id: uuid.UUID) -> WorkoutSession | None:
    return await db.get(WorkoutSession, session_id)


async def list_sessions(db: AsyncSession, skip: int = 0, limit: int = 50) -> list[WorkoutSession]:
    result = await db.execute(
        select(WorkoutSession).order_by(WorkoutSession.started_at.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


# --- Queue ---


async def get_session_exercises(db: AsyncSession, session_id: uuid.UUID) -> list[SessionExercise]:
    result = await db.execute(
        select(SessionExercise)
        .where(SessionExercise.session_id == session_id)
        .order_by(SessionExercise.order_index)
    )
    return list(result.scalars().all())


def current_exercise(rows: Sequence[SessionExercise]) -> SessionExercise | None:
    return next((r for r in rows if r.is_pending), None)


def up_next(rows: Sequence[SessionExercise]) -> list[SessionExercise]:
    """Every row after the current one; empty once nothing is pending."""
    current = current_exercise(rows)
    if current is None:
        return []
    position = list(rows).index(current)
    return list(rows[position + 1 :])


def is_finished(rows: Sequence[SessionExercise]) -> bool:
    return current_exercise(rows) is None


async def get_session_queue(db: AsyncSession, session_id: uuid.UUID) -> SessionQueue:
    rows = await get_session_exercises(db, session_id)
    return SessionQueue(rows=rows, current=current_exercise(rows), up_next=up_next(rows))


async def _get_row(db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID) -> SessionExercise | None:
    result = await db.execute(
        select(SessionExercise)
        .where(
            SessionExercise.session_id == session_id,
            SessionExercise.exercise_id == exercise_id,
        )
        .order_by(SessionExercise.order_index)
        .limit(1)
    )
    return result.scalars().first()


async def _finish_row(
    db: AsyncSession,
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    status: SessionExerciseStatus,
) -> SessionExercise | None:
    row = await _get_row(db, session_id, exercise_id)
    if row is None or not row.is_pending:
        return row
    row.status = status
    row.updated_at = utcnow()
    await db.flush()
    return row


async def mark_exercise_completed(
    db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID
) -> SessionExercise | None:
    """pending -> completed. Missing or already finished rows are left alone."""
    return await _finish_row(db, session_id, exercise_id, SessionExerciseStatus.COMPLETED)


async def skip_exercise(db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID) -> SessionExercise | None:
    """pending -> skipped. Missing or already finished rows are left alone."""
    return await _finish_row(db, session_id, exercise_id, SessionExerciseStatus.SKIPPED)


def _renumber(rows: list[SessionExercise]) -> None:
    now = utcnow()
    for i, row in enumerate(rows):
        row.order_index = i
        row.updated_at = now


async def defer_exercise(
    db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID
) -> list[SessionExercise] | None:
    """Move the exercise to the very end of the queue and count the deferral."""
    rows = await get_session_exercises(db, session_id)
    index = next((i for i, r in enumerate(rows) if r.exercise_id == exercise_id), None)
    if index is None:
        return None
    moved = rows.pop(index)
    moved.deferred_count += 1
    rows.append(moved)
    _renumber(rows)
    await db.flush()
    return rows


async def reorder_exercise(
    db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID, to_index: int
) -> list[SessionExercise] | None:
    """
    Move a pending exercise to to_index in the full queue and renumber.

    Only pending rows move, and never ahead of the current exercise: to_index is
    clamped to [position of the current exercise, last position].
    """
    rows = await get_session_exercises(db, session_id)
    index = next((i for i, r in enumerate(rows) if r.exercise_id == exercise_id), None)
    if index is None:
        return None
    if not rows[index].is_pending:
        return rows
    lowest = next(i for i, r in enumerate(rows) if r.is_pending)
    target = min(max(to_index, lowest), len(rows) - 1)
    moved = rows.pop(index)
    rows.insert(target, moved)
    _renumber(rows)
    await db.flush()
    return rows


# --- Sets ---


def _non_negative_int(value) -> int:
    try:
        return max(0, math.floor(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


def _finite_weight(value) -> float:
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return 0.0
    return weight if math.isfinite(weight) else 0.0


async def count_sets(db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.count(SessionSet.id)).where(
            SessionSet.session_id == session_id,
            SessionSet.exercise_id == exercise_id,
        )
    )
    return int(result.scalar() or 0)


async def log_set(
    db: AsyncSession,
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    reps_completed,
    weight,
    missed_reps=0,
    rest_seconds_before: int | None = None,
) -> SessionSet:
    """
    Append a completed set. set_index is the number of sets already logged for this
    exercise in this session (0, 1, 2, ...). Reps are floored and clamped at zero;
    a non-finite weight is stored as 0.
    """
    now = utcnow()
    set_ = SessionSet(
        session_id=session_id,
        exercise_id=exercise_id,
        set_index=await count_sets(db, session_id, exercise_id),
        created_at=now,
        completed_at=now,
        reps_completed=_non_negative_int(reps_completed),
        weight=_finite_weight(weight),
        missed_reps=_non_negative_int(missed_reps),
        rest_seconds_before=None if rest_seconds_before is None else _non_negative_int(rest_seconds_before),
    )
    db.add(set_)
    await db.flush()
    return set_


async def set_intentional_miss(db: AsyncSession, set_id: uuid.UUID, intentional: bool) -> SessionSet | None:
    set_ = await db.get(SessionSet, set_id)
    if set_ is None:
        return None
    set_.intentional_miss = intentional
    await db.flush()
    return set_


async def get_session_sets(db: AsyncSession, session_id: uuid.UUID) -> list[SessionSet]:
    result = await db.execute(
        select(SessionSet)
        .where(SessionSet.session_id == session_id)
        .order_by(SessionSet.completed_at, SessionSet.set_index)
    )
    return list(result.scalars().all())


async def get_sets_for_exercise(
    db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID
) -> list[SessionSet]:
    result = await db.execute(
        select(SessionSet)
        .where(
            SessionSet.session_id == session_id,
            SessionSet.exercise_id == exercise_id,
        )
        .order_by(SessionSet.set_index)
    )
    return list(result.scalars().all())


async def summarize_session(db: AsyncSession, session_id: uuid.UUID) -> SessionSummaryRead:
    """Per-exercise sets with a next-time suggestion, in queue order, one entry per exercise."""
    session = await db.get(WorkoutSession, session_id)
    if session is None:
        raise NotFound("Session not found")
    rows = await get_session_exercises(db, session_id)
    sets = await get_session_sets(db, session_id)
    result = await db.execute(select(Exercise).where(Exercise.id.in_({r.exercise_id for r in rows})))
    exercises = {e.id: e for e in result.scalars()}

    summaries = []
    seen: set[uuid.UUID] = set()
    for row in rows:
        if row.exercise_id in seen:
            continue
        seen.add(row.exercise_id)
        row_sets = [s for s in sets if s.exercise_id == row.exercise_id]
        exercise = exercises.get(row.exercise_id)
        next_time = suggest_next_time(exercise, row_sets) if exercise is not None else None
        summaries.append(
            ExerciseSummary(
                exercise_id=row.exercise_id,
                status=row.status,
                sets=[SessionSetRead.model_validate(s) for s in row_sets],
                next_time=next_time,
            )
        )
    return SessionSummaryRead(session=SessionRead.model_validate(session), exercises=summaries)
