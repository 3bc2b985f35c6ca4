"""Plan endpoints: assemble a plan four ways, edit it before starting."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.db.session import get_db
from gymlog.models.plan import Plan
from gymlog.schemas.plan import (
    PlanFromFocus,
    PlanFromTemplate,
    PlanQuickPick,
    PlanRead,
    PlanReorder,
    PlanUpdate,
)
from gymlog.services import plans

router = APIRouter()


def _found(plan: Plan | None) -> Plan:
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan


@router.post("/from-template", response_model=PlanRead, status_code=201)
async def create_from_template(payload: PlanFromTemplate, db: AsyncSession = Depends(get_db)):
    return await plans.create_plan_from_template(db, payload.template_id)


@router.post("/from-focus", response_model=PlanRead, status_code=201)
async def create_from_focus(payload: PlanFromFocus, db: AsyncSession = Depends(get_db)):
    """Recent upper/lower exercises from history, topped up from the library."""
    return await plans.create_plan_from_focus(db, payload.focus)


@router.post("/suggested", response_model=PlanRead, status_code=201)
async def create_suggested(db: AsyncSession = Depends(get_db)):
    """Most frequently trained exercises."""
    return await plans.create_plan_suggested(db)


@router.post("/quick-pick", response_model=PlanRead, status_code=201)
async def create_quick_pick(payload: PlanQuickPick, db: AsyncSession = Depends(get_db)):
    return await plans.create_plan_quick_pick(db, payload.name, payload.exercise_ids)


@router.get("/{plan_id}", response_model=PlanRead)
async def get_plan(plan_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return _found(await plans.get_plan(db, plan_id))


@router.patch("/{plan_id}", response_model=PlanRead)
async def update_plan(plan_id: uuid.UUID, payload: PlanUpdate, db: AsyncSession = Depends(get_db)):
    return _found(await plans.update_plan(db, plan_id, payload))


@router.post("/{plan_id}/exercises/{exercise_id}", response_model=PlanRead)
async def add_exercise(plan_id: uuid.UUID, exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return _found(await plans.add_plan_exercise(db, plan_id, exercise_id))


@router.delete("/{plan_id}/exercises/{exercise_id}", response_model=PlanRead)
async def remove_exercise(plan_id: uuid.UUID, exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return _found(await plans.remove_plan_exercise(db, plan_id, exercise_id))


@router.post("/{plan_id}/reorder", response_model=PlanRead)
async def reorder(plan_id: uuid.UUID, payload: PlanReorder, db: AsyncSession = Depends(get_db)):
    return _found(await plans.reorder_plan_exercise(db, plan_id, payload.from_index, payload.to_index))


@router.post("/{plan_id}/defer/{index}", response_model=PlanRead)
async def defer(plan_id: uuid.UUID, index: int, db: AsyncSession = Depends(get_db)):
    return _found(await plans.defer_plan_exercise(db, plan_id, index))
