"""Workout templates - save and reload workout structure."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.db.session import get_db
from gymlog.schemas.template import (
    WorkoutTemplateCreate,
    WorkoutTemplateRead,
    WorkoutTemplateUpdate,
)
from gymlog.services import catalog

router = APIRouter()


@router.get("", response_model=list[WorkoutTemplateRead])
async def list_templates(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
):
    """List workout templates, most recently updated first."""
    return await catalog.list_workout_templates(db, skip=skip, limit=limit)


@router.post("", response_model=WorkoutTemplateRead, status_code=201)
async def create_template(
    payload: WorkoutTemplateCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a template (at least 4 exercises, order preserved)."""
    return await catalog.create_workout_template(db, payload)


@router.get("/{template_id}", response_model=WorkoutTemplateRead)
async def get_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    t = await catalog.get_workout_template(db, template_id)
    if not t:
        raise HTTPException(status_code=404, detail="Template not found")
    return t


@router.patch("/{template_id}", response_model=WorkoutTemplateRead)
async def update_template(
    template_id: uuid.UUID,
    payload: WorkoutTemplateUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Rename or replace the exercise list. Sessions already started are unaffected."""
    return await catalog.update_workout_template(db, template_id, payload)
