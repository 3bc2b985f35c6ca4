"""Session endpoints: start, work through the queue, log sets, finish."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.db.session import get_db
from gymlog.schemas.session import (
    IntentionalMissUpdate,
    SessionExerciseRead,
    SessionQueueRead,
    SessionRead,
    SessionReorder,
    SessionSetCreate,
    SessionSetRead,
    SessionSummaryRead,
)
from gymlog.services import sessions

router = APIRouter()


class SessionStart(BaseModel):
    plan_id: uuid.UUID


async def _queue(db: AsyncSession, session_id: uuid.UUID) -> SessionQueueRead:
    queue = await sessions.get_session_queue(db, session_id)
    return SessionQueueRead.model_validate(queue, from_attributes=True)


@router.get("", response_model=list[SessionRead])
async def list_sessions(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
):
    """List sessions, newest first."""
    return await sessions.list_sessions(db, skip=skip, limit=limit)


@router.post("", response_model=SessionRead, status_code=201)
async def start_session(payload: SessionStart, db: AsyncSession = Depends(get_db)):
    """Start a session from a plan. 409 if another workout is still in progress."""
    return await sessions.start_session_from_plan(db, payload.plan_id)


@router.get("/active", response_model=SessionRead | None)
async def get_active_session(db: AsyncSession = Depends(get_db)):
    return await sessions.get_active_session(db)


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    session = await sessions.get_session(db, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/{session_id}/end", response_model=SessionRead)
async def end_session(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Finish the workout. Calling it again keeps the first end time."""
    session = await sessions.end_session(db, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.get("/{session_id}/queue", response_model=SessionQueueRead)
async def get_queue(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Ordered exercises, the current one (first pending) and what comes after it."""
    return await _queue(db, session_id)


@router.post("/{session_id}/exercises/{exercise_id}/complete", response_model=SessionQueueRead)
async def complete_exercise(session_id: uuid.UUID, exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await sessions.mark_exercise_completed(db, session_id, exercise_id)
    return await _queue(db, session_id)


@router.post("/{session_id}/exercises/{exercise_id}/skip", response_model=SessionQueueRead)
async def skip_exercise(session_id: uuid.UUID, exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await sessions.skip_exercise(db, session_id, exercise_id)
    return await _queue(db, session_id)


@router.post("/{session_id}/exercises/{exercise_id}/defer", response_model=SessionQueueRead)
async def defer_exercise(session_id: uuid.UUID, exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Push the exercise to the end of the queue."""
    await sessions.defer_exercise(db, session_id, exercise_id)
    return await _queue(db, session_id)


@router.post("/{session_id}/exercises/{exercise_id}/reorder", response_model=SessionQueueRead)
async def reorder_exercise(
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: SessionReorder,
    db: AsyncSession = Depends(get_db),
):
    await sessions.reorder_exercise(db, session_id, exercise_id, payload.to_index)
    return await _queue(db, session_id)


@router.get("/{session_id}/sets", response_model=list[SessionSetRead])
async def list_sets(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await sessions.get_session_sets(db, session_id)


@router.get("/{session_id}/exercises/{exercise_id}/sets", response_model=list[SessionSetRead])
async def list_exercise_sets(session_id: uuid.UUID, exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await sessions.get_sets_for_exercise(db, session_id, exercise_id)


@router.post("/{session_id}/sets", response_model=SessionSetRead, status_code=201)
async def log_set(session_id: uuid.UUID, payload: SessionSetCreate, db: AsyncSession = Depends(get_db)):
    """Log a completed set; set_index is assigned in logging order per exercise."""
    session = await sessions.get_session(db, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return await sessions.log_set(
        db,
        session_id,
        payload.exercise_id,
        reps_completed=payload.reps_completed,
        weight=payload.weight,
        missed_reps=payload.missed_reps,
        rest_seconds_before=payload.rest_seconds_before,
    )


@router.patch("/{session_id}/sets/{set_id}/intentional-miss", response_model=SessionSetRead)
async def mark_intentional_miss(
    session_id: uuid.UUID,
    set_id: uuid.UUID,
    payload: IntentionalMissUpdate,
    db: AsyncSession = Depends(get_db),
):
    set_ = await sessions.set_intentional_miss(db, set_id, payload.intentional)
    if not set_ or set_.session_id != session_id:
        raise HTTPException(status_code=404, detail="Set not found")
    return set_


@router.get("/{session_id}/summary", response_model=SessionSummaryRead)
async def get_summary(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Sets per exercise with next-time weight suggestions."""
    return await sessions.summarize_session(db, session_id)


@router.get("/{session_id}/exercises", response_model=list[SessionExerciseRead])
async def list_session_exercises(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await sessions.get_session_exercises(db, session_id)
