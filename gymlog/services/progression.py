"""Progression advice: where to start today and what to change next time."""

from __future__ import annotations

import math
import uuid
from collections.abc import Sequence
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.core.constants import (
    HEAVY_WEIGHT_THRESHOLD,
    LARGE_INCREMENT,
    MISSED_REPS_DELOAD_FACTOR,
    SMALL_INCREMENT,
    STALE_AFTER_DAYS,
    STALE_DELOAD_FACTOR,
)
from gymlog.core.enums import ExerciseType
from gymlog.db.base import as_utc, utcnow
from gymlog.models.exercise import Exercise
from gymlog.models.session import SessionSet
from gymlog.schemas.suggestion import LastPerformance, NextTimeSuggestion, StartSuggestion

NOTE_NEW_EXERCISE = "New exercise - start light."
NOTE_BEEN_A_WHILE = "It's been a while - start a bit lighter."
NOTE_UNINTENTIONAL_MISS = "Missed reps (not intentional) - consider a small step down next time."
NOTE_HIT_TARGET = "Hit target reps (worst set) - consider a small increase next time."
NOTE_BUILD_REPS = "Keep the weight; build reps on the worst set."


def default_target_reps(exercise_type: ExerciseType | None) -> int:
    if exercise_type == ExerciseType.ISOLATION:
        return 12
    if exercise_type == ExerciseType.COMPOUND:
        return 8
    return 10


def weight_increment(weight: float) -> float:
    return LARGE_INCREMENT if weight >= HEAVY_WEIGHT_THRESHOLD else SMALL_INCREMENT


def round_to_increment(weight: float) -> float:
    """Round half up to the nearest plate-friendly step; never below zero."""
    if weight <= 0:
        return 0.0
    inc = weight_increment(weight)
    return math.floor(weight / inc + 0.5) * inc


def suggest_start(
    exercise: Exercise,
    last: LastPerformance | None = None,
    now: datetime | None = None,
) -> StartSuggestion:
    """Starting weight and rep target for today's first set."""
    target = default_target_reps(exercise.type)
    if last is None:
        return StartSuggestion(weight=0, reps_target=target, note=NOTE_NEW_EXERCISE)

    now = as_utc(now or utcnow())
    if now - as_utc(last.last_completed_at) >= timedelta(days=STALE_AFTER_DAYS):
        lighter = round_to_increment(last.last_weight * STALE_DELOAD_FACTOR)
        return StartSuggestion(weight=lighter, reps_target=target, note=NOTE_BEEN_A_WHILE)

    return StartSuggestion(weight=last.last_weight, reps_target=target)


def compute_worst_set(sets: Sequence[SessionSet]) -> SessionSet | None:
    """Fewest reps, ties broken by lowest weight; the earliest set wins a full tie."""
    if not sets:
        return None
    worst = sets[0]
    for s in sets[1:]:
        if s.reps_completed < worst.reps_completed:
            worst = s
        elif s.reps_completed == worst.reps_completed and s.weight < worst.weight:
            worst = s
    return worst


def had_unintentional_miss(sets: Sequence[SessionSet]) -> bool:
    return any(s.missed_reps > 0 and s.intentional_miss is not True for s in sets)


def suggest_next_time(
    exercise: Exercise,
    sets: Sequence[SessionSet],
    reps_target: int | None = None,
) -> NextTimeSuggestion | None:
    """Next session's weight, driven by the worst set of this session."""
    worst = compute_worst_set(sets)
    if worst is None:
        return None
    target = reps_target if reps_target is not None else default_target_reps(exercise.type)

    if had_unintentional_miss(sets):
        down = round_to_increment(max(0.0, worst.weight * MISSED_REPS_DELOAD_FACTOR))
        return NextTimeSuggestion(weight=down, action="decrease", note=NOTE_UNINTENTIONAL_MISS)

    if worst.reps_completed >= target:
        up = round_to_increment(worst.weight + weight_increment(worst.weight))
        return NextTimeSuggestion(weight=up, action="increase", note=NOTE_HIT_TARGET)

    return NextTimeSuggestion(weight=worst.weight, action="keep", note=NOTE_BUILD_REPS)


async def get_last_performance(
    db: AsyncSession,
    exercise_id: uuid.UUID,
    exclude_session_id: uuid.UUID | None = None,
) -> LastPerformance | None:
    """
    Most recent completed set for this exercise across all sessions.
    Pass exclude_session_id (e.g. the current session) to look only at earlier sessions.
    """
    stmt = select(SessionSet).where(
        SessionSet.exercise_id == exercise_id,
        SessionSet.completed_at.isnot(None),
    )
    if exclude_session_id is not None:
        stmt = stmt.where(SessionSet.session_id != exclude_session_id)
    stmt = stmt.order_by(SessionSet.completed_at.desc(), SessionSet.set_index.desc()).limit(1)
    result = await db.execute(stmt)
    last = result.scalar_one_or_none()
    if last is None:
        return None
    return LastPerformance(
        last_completed_at=as_utc(last.completed_at),
        last_weight=last.weight,
        last_reps=last.reps_completed,
        last_rest_seconds=last.rest_seconds_before,
    )
