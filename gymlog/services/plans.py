"""Plans: build a staging list of exercises from one of four sources, then let the user edit it."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.core.constants import (
    MIN_EXERCISES_PER_WORKOUT,
    QUICK_PICK_PLAN_NAME,
    SUGGESTED_PLAN_NAME,
)
from gymlog.core.enums import BodyFocus, PlanMode
from gymlog.core.exceptions import InsufficientHistory, NotFound, ValidationError
from gymlog.models.plan import Plan
from gymlog.schemas.plan import PlanUpdate
from gymlog.services.assembler import assemble_focus_plan, assemble_suggested_plan
from gymlog.services.catalog import (
    ensure_exercises_exist,
    get_workout_template,
    require_distinct,
    require_min_exercises,
    require_name,
)

logger = logging.getLogger(__name__)


async def _add_plan(db: AsyncSession, plan: Plan) -> Plan:
    db.add(plan)
    await db.flush()
    logger.info("Created %s plan %s (%d exercises)", plan.mode.value, plan.id, len(plan.exercise_ids))
    return plan


def _ids(exercise_ids: Sequence[uuid.UUID]) -> list[str]:
    return [str(i) for i in exercise_ids]


async def create_plan_from_template(db: AsyncSession, template_id: uuid.UUID) -> Plan:
    """Copy the template's exercise list verbatim, in order."""
    t = await get_workout_template(db, template_id)
    if t is None:
        raise NotFound("Template not found")
    plan = Plan(
        mode=PlanMode.TEMPLATE,
        name=t.name,
        template_id=t.id,
        exercise_ids=_ids(t.exercise_ids),
    )
    return await _add_plan(db, plan)


async def create_plan_from_focus(db: AsyncSession, focus: BodyFocus) -> Plan:
    exercise_ids = await assemble_focus_plan(db, focus)
    if len(exercise_ids) < MIN_EXERCISES_PER_WORKOUT:
        raise ValidationError("Not enough exercises available for that focus yet.")
    plan = Plan(
        mode=PlanMode.FOCUS,
        name=focus.value.capitalize(),
        focus=focus,
        exercise_ids=_ids(exercise_ids),
    )
    return await _add_plan(db, plan)


async def create_plan_suggested(db: AsyncSession) -> Plan:
    exercise_ids = await assemble_suggested_plan(db)
    if len(exercise_ids) < MIN_EXERCISES_PER_WORKOUT:
        raise InsufficientHistory(
            "Not enough history yet for a suggestion. Use Quick pick or a focus workout."
        )
    plan = Plan(mode=PlanMode.SUGGESTED, name=SUGGESTED_PLAN_NAME, exercise_ids=_ids(exercise_ids))
    return await _add_plan(db, plan)


async def create_plan_quick_pick(db: AsyncSession, name: str, exercise_ids: Sequence[uuid.UUID]) -> Plan:
    require_min_exercises(exercise_ids, "Pick at least 4 exercises.")
    require_distinct(exercise_ids)
    await ensure_exercises_exist(db, exercise_ids)
    plan = Plan(
        mode=PlanMode.QUICKPICK,
        name=name.strip() or QUICK_PICK_PLAN_NAME,
        exercise_ids=_ids(exercise_ids),
    )
    return await _add_plan(db, plan)


async def get_plan(db: AsyncSession, plan_id: uuid.UUID) -> Plan | None:
    return await db.get(Plan, plan_id)


# --- Pre-session editing; a missing plan is a no-op (returns None) ---


async def update_plan(db: AsyncSession, plan_id: uuid.UUID, payload: PlanUpdate) -> Plan | None:
    """Rename and/or replace the exercise list. The minimum count is checked when a session starts."""
    plan = await db.get(Plan, plan_id)
    if plan is None:
        return None
    data = payload.model_dump(exclude_unset=True)
    if data.get("name") is not None:
        plan.name = require_name(data["name"], "Plan")
    if data.get("exercise_ids") is not None:
        require_distinct(data["exercise_ids"])
        await ensure_exercises_exist(db, data["exercise_ids"])
        plan.exercise_ids = _ids(data["exercise_ids"])
    await db.flush()
    return plan


async def add_plan_exercise(db: AsyncSession, plan_id: uuid.UUID, exercise_id: uuid.UUID) -> Plan | None:
    """Append an exercise unless it is already planned."""
    plan = await db.get(Plan, plan_id)
    if plan is None:
        return None
    if str(exercise_id) not in plan.exercise_ids:
        await ensure_exercises_exist(db, [exercise_id])
        plan.exercise_ids = [*plan.exercise_ids, str(exercise_id)]
        await db.flush()
    return plan


async def remove_plan_exercise(db: AsyncSession, plan_id: uuid.UUID, exercise_id: uuid.UUID) -> Plan | None:
    plan = await db.get(Plan, plan_id)
    if plan is None:
        return None
    plan.exercise_ids = [i for i in plan.exercise_ids if i != str(exercise_id)]
    await db.flush()
    return plan


async def reorder_plan_exercise(
    db: AsyncSession, plan_id: uuid.UUID, from_index: int, to_index: int
) -> Plan | None:
    """Move the exercise at from_index to to_index (clamped to the list)."""
    plan = await db.get(Plan, plan_id)
    if plan is None:
        return None
    ids = list(plan.exercise_ids)
    if not 0 <= from_index < len(ids):
        return plan
    moved = ids.pop(from_index)
    ids.insert(min(max(to_index, 0), len(ids)), moved)
    plan.exercise_ids = ids
    await db.flush()
    return plan


async def defer_plan_exercise(db: AsyncSession, plan_id: uuid.UUID, index: int) -> Plan | None:
    """Move the exercise at index to the end of the plan."""
    plan = await db.get(Plan, plan_id)
    if plan is None:
        return None
    ids = list(plan.exercise_ids)
    if not 0 <= index < len(ids):
        return plan
    ids.append(ids.pop(index))
    plan.exercise_ids = ids
    await db.flush()
    return plan
