"""Plan assembly heuristics: pick exercises for a body focus or from training history."""

from __future__ import annotations

import uuid
from collections import Counter

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.core.constants import (
    LOWER_BODY_MUSCLES,
    MIN_EXERCISES_PER_WORKOUT,
    PLAN_TARGET_SIZE,
    RECENT_HISTORY_LIMIT,
    UPPER_BODY_MUSCLES,
)
from gymlog.core.enums import BodyFocus
from gymlog.models.exercise import Exercise
from gymlog.models.session import SessionSet

FOCUS_MUSCLES = {
    BodyFocus.UPPER: UPPER_BODY_MUSCLES,
    BodyFocus.LOWER: LOWER_BODY_MUSCLES,
}


def matches_focus(exercise: Exercise, focus: BodyFocus) -> bool:
    focus_set = FOCUS_MUSCLES[focus]
    return any(m in focus_set for m in exercise.muscles)


async def recent_distinct_exercise_ids(db: AsyncSession, limit: int = RECENT_HISTORY_LIMIT) -> list[uuid.UUID]:
    """Distinct exercises from completed sets, most recently performed first."""
    result = await db.execute(
        select(SessionSet.exercise_id)
        .where(SessionSet.completed_at.isnot(None))
        .order_by(SessionSet.completed_at.desc())
    )
    seen: set[uuid.UUID] = set()
    out: list[uuid.UUID] = []
    for exercise_id in result.scalars():
        if exercise_id in seen:
            continue
        seen.add(exercise_id)
        out.append(exercise_id)
        if len(out) >= limit:
            break
    return out


async def assemble_focus_plan(db: AsyncSession, focus: BodyFocus) -> list[uuid.UUID]:
    """
    Up to PLAN_TARGET_SIZE exercises for the focus: recent history first, then the
    library in insertion order when history alone gives fewer than the minimum.
    """
    recent = await recent_distinct_exercise_ids(db)
    by_id: dict[uuid.UUID, Exercise] = {}
    if recent:
        result = await db.execute(select(Exercise).where(Exercise.id.in_(recent)))
        by_id = {e.id: e for e in result.scalars()}

    picked: list[uuid.UUID] = []
    for exercise_id in recent:
        ex = by_id.get(exercise_id)
        if ex is None or not matches_focus(ex, focus):
            continue
        picked.append(exercise_id)
        if len(picked) >= PLAN_TARGET_SIZE:
            break

    if len(picked) >= MIN_EXERCISES_PER_WORKOUT:
        return picked

    # Fallback: fill from the library (no or little history yet).
    # Equal timestamps (batch imports) fall back to name, then id.
    result = await db.execute(
        select(Exercise).order_by(Exercise.created_at, Exercise.normalized_name, Exercise.id)
    )
    for ex in result.scalars():
        if len(picked) >= PLAN_TARGET_SIZE:
            break
        if ex.id in picked or not matches_focus(ex, focus):
            continue
        picked.append(ex.id)
    return picked


async def assemble_suggested_plan(db: AsyncSession) -> list[uuid.UUID]:
    """Top PLAN_TARGET_SIZE exercises by number of completed sets (ties keep first-seen order)."""
    result = await db.execute(
        select(SessionSet.exercise_id)
        .where(SessionSet.completed_at.isnot(None))
        .order_by(SessionSet.completed_at)
    )
    freq = Counter(result.scalars())
    ranked = sorted(freq.items(), key=lambda item: item[1], reverse=True)
    return [exercise_id for exercise_id, _ in ranked[:PLAN_TARGET_SIZE]]
