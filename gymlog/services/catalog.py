"""Exercise and template records: create, read, update and name search."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gymlog.core.constants import MIN_EXERCISES_PER_WORKOUT
from gymlog.core.exceptions import NotFound, ValidationError
from gymlog.db.base import utcnow
from gymlog.models.exercise import Exercise
from gymlog.models.template import TemplateExercise, WorkoutTemplate
from gymlog.schemas.exercise import ExerciseCreate, ExerciseUpdate
from gymlog.schemas.template import WorkoutTemplateCreate, WorkoutTemplateUpdate
from gymlog.services.normalize import normalize_name

logger = logging.getLogger(__name__)


def require_name(name: str, what: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError(f"{what} name is required.")
    return name


def require_min_exercises(exercise_ids: Sequence[uuid.UUID], message: str) -> None:
    if len(exercise_ids) < MIN_EXERCISES_PER_WORKOUT:
        raise ValidationError(message)


def require_distinct(exercise_ids: Sequence[uuid.UUID]) -> None:
    if len(set(exercise_ids)) != len(exercise_ids):
        raise ValidationError("Each exercise can only be added once.")


async def ensure_exercises_exist(db: AsyncSession, exercise_ids: Sequence[uuid.UUID]) -> None:
    if not exercise_ids:
        return
    result = await db.execute(select(Exercise.id).where(Exercise.id.in_(set(exercise_ids))))
    missing = set(exercise_ids) - set(result.scalars())
    if missing:
        raise ValidationError(f"Unknown exercise id(s): {', '.join(sorted(str(m) for m in missing))}")


# --- Exercises ---


async def create_custom_exercise(db: AsyncSession, payload: ExerciseCreate) -> Exercise:
    """Create a user-defined exercise (normalized search keys are derived by the model)."""
    data = payload.model_dump()
    data["name"] = require_name(data["name"], "Exercise")
    exercise = Exercise(**data, is_custom=True)
    db.add(exercise)
    await db.flush()
    return exercise


async def get_exercise(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise | None:
    return await db.get(Exercise, exercise_id)


async def update_exercise(db: AsyncSession, exercise_id: uuid.UUID, payload: ExerciseUpdate) -> Exercise | None:
    """Partial update. Returns None if the exercise does not exist."""
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None:
        return None
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = require_name(data["name"] or "", "Exercise")
    for k, v in data.items():
        current = getattr(exercise, k)
        if isinstance(current, list):
            v = list(v or [])
        elif v is None and k == "type":
            continue
        setattr(exercise, k, v)
    exercise.updated_at = utcnow()
    await db.flush()
    return exercise


async def search_exercises(db: AsyncSession, query: str = "", limit: int = 100) -> list[Exercise]:
    """Exercises whose normalized name or any alias contains the normalized query, by name."""
    result = await db.execute(select(Exercise).order_by(Exercise.name))
    exercises = list(result.scalars())
    q = normalize_name(query)
    if q:
        exercises = [e for e in exercises if e.matches_query(q)]
    return exercises[:limit]


async def get_exercises_by_ids(db: AsyncSession, exercise_ids: Sequence[uuid.UUID]) -> list[Exercise]:
    """Exercises in the order of the given ids; unknown ids are dropped."""
    if not exercise_ids:
        return []
    result = await db.execute(select(Exercise).where(Exercise.id.in_(set(exercise_ids))))
    by_id = {e.id: e for e in result.scalars()}
    return [by_id[i] for i in exercise_ids if i in by_id]


# --- Templates ---


def _template_query():
    return select(WorkoutTemplate).options(selectinload(WorkoutTemplate.exercises))


def _set_template_exercises(template: WorkoutTemplate, exercise_ids: Sequence[uuid.UUID]) -> None:
    template.exercises = [
        TemplateExercise(exercise_id=ex_id, order_in_template=i) for i, ex_id in enumerate(exercise_ids)
    ]


async def create_workout_template(db: AsyncSession, payload: WorkoutTemplateCreate) -> WorkoutTemplate:
    """Create a template from a name and at least MIN_EXERCISES_PER_WORKOUT exercises."""
    require_min_exercises(payload.exercise_ids, "Workout templates need at least 4 exercises.")
    require_distinct(payload.exercise_ids)
    name = require_name(payload.name, "Template")
    await ensure_exercises_exist(db, payload.exercise_ids)

    t = WorkoutTemplate(name=name)
    _set_template_exercises(t, payload.exercise_ids)
    db.add(t)
    await db.flush()
    logger.info("Created template %s with %d exercises", t.id, len(payload.exercise_ids))
    return await get_workout_template(db, t.id)


async def get_workout_template(db: AsyncSession, template_id: uuid.UUID) -> WorkoutTemplate | None:
    result = await db.execute(_template_query().where(WorkoutTemplate.id == template_id))
    return result.scalar_one_or_none()


async def list_workout_templates(db: AsyncSession, skip: int = 0, limit: int = 50) -> list[WorkoutTemplate]:
    """Most recently updated first."""
    result = await db.execute(
        _template_query().order_by(WorkoutTemplate.updated_at.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


async def update_workout_template(
    db: AsyncSession, template_id: uuid.UUID, payload: WorkoutTemplateUpdate
) -> WorkoutTemplate:
    """Rename and/or replace the exercise list. Sessions already started keep their own snapshot."""
    t = await get_workout_template(db, template_id)
    if t is None:
        raise NotFound("Template not found")
    data = payload.model_dump(exclude_unset=True)
    if data.get("name") is not None:
        t.name = require_name(data["name"], "Template")
    if data.get("exercise_ids") is not None:
        require_min_exercises(data["exercise_ids"], "Workout templates need at least 4 exercises.")
        require_distinct(data["exercise_ids"])
        await ensure_exercises_exist(db, data["exercise_ids"])
        _set_template_exercises(t, data["exercise_ids"])
    t.updated_at = utcnow()
    await db.flush()
    return await get_workout_template(db, template_id)
