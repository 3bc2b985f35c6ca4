"""Advice endpoints: what you did last time, where to start, how long to rest, what to change next time."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.db.session import get_db
from gymlog.models.exercise import Exercise
from gymlog.schemas.suggestion import (
    LastPerformance,
    NextTimeSuggestion,
    RestSuggestion,
    StartSuggestion,
)
from gymlog.services.catalog import get_exercise
from gymlog.services.progression import get_last_performance, suggest_next_time, suggest_start
from gymlog.services.rest import format_seconds, suggest_rest_seconds
from gymlog.services.sessions import get_sets_for_exercise

router = APIRouter()


async def _exercise_or_404(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise:
    exercise = await get_exercise(db, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("/exercises/{exercise_id}/last-performance", response_model=LastPerformance | None)
async def last_performance(
    exercise_id: uuid.UUID,
    exclude_session_id: uuid.UUID | None = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Most recent completed set for this exercise. Pass exclude_session_id
    (e.g. the current session) to get the *previous* session instead.
    """
    await _exercise_or_404(db, exercise_id)
    return await get_last_performance(db, exercise_id, exclude_session_id)


@router.get("/exercises/{exercise_id}/start", response_model=StartSuggestion)
async def start_suggestion(
    exercise_id: uuid.UUID,
    exclude_session_id: uuid.UUID | None = None,
    db: AsyncSession = Depends(get_db),
):
    exercise = await _exercise_or_404(db, exercise_id)
    last = await get_last_performance(db, exercise_id, exclude_session_id)
    return suggest_start(exercise, last)


@router.get("/exercises/{exercise_id}/rest", response_model=RestSuggestion)
async def rest_suggestion(
    exercise_id: uuid.UUID,
    missed_reps: bool = False,
    db: AsyncSession = Depends(get_db),
):
    exercise = await _exercise_or_404(db, exercise_id)
    seconds = suggest_rest_seconds(exercise.type, missed_reps)
    return RestSuggestion(seconds=seconds, formatted=format_seconds(seconds))


@router.get(
    "/sessions/{session_id}/exercises/{exercise_id}/next-time",
    response_model=NextTimeSuggestion | None,
)
async def next_time_suggestion(
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    reps_target: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Null when nothing was logged for the exercise in this session."""
    exercise = await _exercise_or_404(db, exercise_id)
    sets = await get_sets_for_exercise(db, session_id, exercise_id)
    return suggest_next_time(exercise, sets, reps_target)
