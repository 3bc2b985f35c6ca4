"""Exercise endpoints: custom exercises, name search."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.db.session import get_db
from gymlog.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate
from gymlog.services import catalog

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    q: str = "",
    limit: int = 100,
):
    """List exercises by name, optionally filtered by a name/alias substring (case and punctuation insensitive)."""
    return await catalog.search_exercises(db, q, limit=limit)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a custom exercise."""
    return await catalog.create_custom_exercise(db, payload)


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    exercise = await catalog.get_exercise(db, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.patch("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an exercise (partial). Search keys follow name/alias changes."""
    exercise = await catalog.update_exercise(db, exercise_id, payload)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
