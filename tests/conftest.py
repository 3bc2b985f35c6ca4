"""Shared fixtures: a fresh in-memory store per test plus record factories."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from gymlog.core.enums import ExerciseType, PlanMode
from gymlog.db.session import init_models
from gymlog.models import Exercise, SessionSet, WorkoutSession

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine) -> AsyncSession:
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with maker() as session:
        yield session


@pytest.fixture
def add_exercise(db):
    """Insert a library exercise; created_at follows call order so library order is stable."""
    counter = {"n": 0}

    async def _add(
        name: str,
        type: ExerciseType = ExerciseType.COMPOUND,
        primary: list[str] | None = None,
        secondary: list[str] | None = None,
        aliases: list[str] | None = None,
    ) -> Exercise:
        counter["n"] += 1
        exercise = Exercise(
            name=name,
            aliases=aliases or [],
            type=type,
            primary_muscles=primary or [],
            secondary_muscles=secondary or [],
            equipment=[],
            image_urls=[],
            video_urls=[],
            created_at=BASE_TIME + timedelta(seconds=counter["n"]),
        )
        db.add(exercise)
        await db.flush()
        return exercise

    return _add


@pytest.fixture
def add_history(db):
    """Record a finished past session with (exercise, completed_at, weight, reps) sets."""

    async def _add(sets: list[tuple[Exercise, datetime, float, int]]) -> WorkoutSession:
        session = WorkoutSession(
            id=uuid.uuid4(),
            started_at=min(t for _, t, _, _ in sets),
            ended_at=max(t for _, t, _, _ in sets),
            active_slot=None,
            mode=PlanMode.QUICKPICK,
            name="Past workout",
            planned_exercise_ids=[],
        )
        db.add(session)
        per_exercise: dict[uuid.UUID, int] = {}
        for exercise, completed_at, weight, reps in sets:
            index = per_exercise.get(exercise.id, 0)
            per_exercise[exercise.id] = index + 1
            db.add(
                SessionSet(
                    session_id=session.id,
                    exercise_id=exercise.id,
                    set_index=index,
                    created_at=completed_at,
                    completed_at=completed_at,
                    reps_completed=reps,
                    weight=weight,
                    missed_reps=0,
                )
            )
        await db.flush()
        return session

    return _add
