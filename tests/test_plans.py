"""Plan assembly in all four modes, plus pre-session editing."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from gymlog.core.enums import BodyFocus, PlanMode
from gymlog.core.exceptions import InsufficientHistory, NotFound, ValidationError
from gymlog.schemas.plan import PlanUpdate
from gymlog.schemas.template import WorkoutTemplateCreate
from gymlog.services import assembler, catalog, plans

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

UPPER = ["chest"]
LOWER = ["quadriceps"]


async def _library(add_exercise, n: int, muscles: list[str], prefix: str):
    return [await add_exercise(f"{prefix} {i}", primary=muscles) for i in range(n)]


def _ids(exercises):
    return [e.id for e in exercises]


# --- template / quick-pick minimums ---


@pytest.mark.asyncio
async def test_template_needs_four_exercises(db, add_exercise):
    lib = await _library(add_exercise, 4, UPPER, "Press")
    with pytest.raises(ValidationError):
        await catalog.create_workout_template(db, WorkoutTemplateCreate(name="Push", exercise_ids=_ids(lib[:3])))

    t = await catalog.create_workout_template(db, WorkoutTemplateCreate(name=" Push ", exercise_ids=_ids(lib)))
    assert t.name == "Push"
    assert t.exercise_ids == _ids(lib)


@pytest.mark.asyncio
async def test_template_rejects_blank_name(db, add_exercise):
    lib = await _library(add_exercise, 4, UPPER, "Press")
    with pytest.raises(ValidationError):
        await catalog.create_workout_template(db, WorkoutTemplateCreate(name="   ", exercise_ids=_ids(lib)))


@pytest.mark.asyncio
async def test_quick_pick_needs_four_exercises(db, add_exercise):
    lib = await _library(add_exercise, 4, UPPER, "Row")
    with pytest.raises(ValidationError):
        await plans.create_plan_quick_pick(db, "Quick", _ids(lib[:3]))

    plan = await plans.create_plan_quick_pick(db, "  ", _ids(lib))
    assert plan.mode == PlanMode.QUICKPICK
    assert plan.name == "Quick pick"
    assert plan.planned_ids == _ids(lib)


@pytest.mark.asyncio
async def test_quick_pick_rejects_unknown_exercise(db, add_exercise):
    lib = await _library(add_exercise, 3, UPPER, "Row")
    with pytest.raises(ValidationError):
        await plans.create_plan_quick_pick(db, "Quick", [*_ids(lib), uuid.uuid4()])


# --- from template ---


@pytest.mark.asyncio
async def test_plan_from_template_copies_order(db, add_exercise):
    lib = await _library(add_exercise, 5, UPPER, "Curl")
    order = _ids([lib[3], lib[0], lib[4], lib[1]])
    t = await catalog.create_workout_template(db, WorkoutTemplateCreate(name="Arms", exercise_ids=order))

    plan = await plans.create_plan_from_template(db, t.id)
    assert plan.mode == PlanMode.TEMPLATE
    assert plan.name == "Arms"
    assert plan.template_id == t.id
    assert plan.planned_ids == order


@pytest.mark.asyncio
async def test_plan_from_missing_template(db):
    with pytest.raises(NotFound):
        await plans.create_plan_from_template(db, uuid.uuid4())


# --- from focus ---


@pytest.mark.asyncio
async def test_focus_history_first_then_library(db, add_exercise, add_history):
    library_upper = await _library(add_exercise, 3, ["Back"], "Pulldown")
    recent = await _library(add_exercise, 3, ["chest"], "Bench")
    legs = await add_exercise("Squat", primary=LOWER)
    await add_history(
        [
            (recent[2], NOW - timedelta(minutes=1), 60, 8),
            (legs, NOW - timedelta(minutes=2), 100, 5),
            (recent[0], NOW - timedelta(minutes=3), 60, 8),
            (recent[1], NOW - timedelta(minutes=4), 60, 8),
            (recent[2], NOW - timedelta(days=3), 60, 8),
        ]
    )

    picked = await assembler.assemble_focus_plan(db, BodyFocus.UPPER)
    assert len(picked) == 5
    assert picked[:3] == _ids([recent[2], recent[0], recent[1]])
    assert picked[3:] == _ids(library_upper[:2])
    assert legs.id not in picked


@pytest.mark.asyncio
async def test_focus_uses_history_alone_when_enough(db, add_exercise, add_history):
    lifts = await _library(add_exercise, 6, UPPER, "Press")
    await add_history([(ex, NOW - timedelta(minutes=i), 50, 10) for i, ex in enumerate(lifts)])

    picked = await assembler.assemble_focus_plan(db, BodyFocus.UPPER)
    assert picked == _ids(lifts[:5])


@pytest.mark.asyncio
async def test_focus_matches_secondary_muscles(db, add_exercise):
    for i in range(4):
        await add_exercise(f"Lunge {i}", primary=["Cardio"], secondary=["Glutes"])
    plan = await plans.create_plan_from_focus(db, BodyFocus.LOWER)
    assert plan.name == "Lower"
    assert plan.focus == BodyFocus.LOWER
    assert len(plan.exercise_ids) == 4


@pytest.mark.asyncio
async def test_focus_not_enough_exercises(db, add_exercise):
    await _library(add_exercise, 3, LOWER, "Squat")
    await _library(add_exercise, 4, UPPER, "Press")
    with pytest.raises(ValidationError):
        await plans.create_plan_from_focus(db, BodyFocus.LOWER)


# --- suggested ---


@pytest.mark.asyncio
async def test_suggested_ranks_by_set_count(db, add_exercise, add_history):
    lifts = await _library(add_exercise, 6, UPPER, "Lift")
    counts = [2, 5, 1, 3, 3, 4]
    sets = []
    for ex, n in zip(lifts, counts):
        sets += [(ex, NOW - timedelta(hours=1, minutes=len(sets) + i), 40, 10) for i in range(n)]
    await add_history(sets)

    plan = await plans.create_plan_suggested(db)
    assert plan.mode == PlanMode.SUGGESTED
    assert plan.name == "Suggested"
    top = plan.planned_ids
    assert top[:2] == _ids([lifts[1], lifts[5]])
    assert set(top[2:4]) == set(_ids([lifts[3], lifts[4]]))
    assert top[4] == lifts[0].id
    assert lifts[2].id not in top


@pytest.mark.asyncio
async def test_suggested_needs_history(db, add_exercise, add_history):
    lifts = await _library(add_exercise, 3, UPPER, "Lift")
    await add_history([(ex, NOW, 40, 10) for ex in lifts])
    with pytest.raises(InsufficientHistory):
        await plans.create_plan_suggested(db)


# --- editing ---


@pytest.mark.asyncio
async def test_plan_editing(db, add_exercise):
    lib = await _library(add_exercise, 6, UPPER, "Fly")
    a, b, c, d, e, f = _ids(lib)
    plan = await plans.create_plan_quick_pick(db, "Chest day", [a, b, c, d])

    await plans.reorder_plan_exercise(db, plan.id, 0, 2)
    assert plan.planned_ids == [b, c, a, d]

    await plans.defer_plan_exercise(db, plan.id, 0)
    assert plan.planned_ids == [c, a, d, b]

    await plans.add_plan_exercise(db, plan.id, e)
    await plans.add_plan_exercise(db, plan.id, e)
    assert plan.planned_ids == [c, a, d, b, e]

    await plans.remove_plan_exercise(db, plan.id, a)
    assert plan.planned_ids == [c, d, b, e]

    await plans.update_plan(db, plan.id, PlanUpdate(name="Renamed", exercise_ids=[f, e, d, c]))
    assert plan.name == "Renamed"
    assert plan.planned_ids == [f, e, d, c]


@pytest.mark.asyncio
async def test_plan_editing_missing_plan_is_noop(db):
    missing = uuid.uuid4()
    assert await plans.get_plan(db, missing) is None
    assert await plans.defer_plan_exercise(db, missing, 0) is None
    assert await plans.reorder_plan_exercise(db, missing, 0, 1) is None
    assert await plans.remove_plan_exercise(db, missing, uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_duplicate_exercises_are_rejected(db, add_exercise):
    lib = await _library(add_exercise, 4, UPPER, "Dip")
    a, b, c, d = _ids(lib)
    with pytest.raises(ValidationError):
        await plans.create_plan_quick_pick(db, "Twice", [a, b, c, a])
    with pytest.raises(ValidationError):
        await catalog.create_workout_template(db, WorkoutTemplateCreate(name="Twice", exercise_ids=[a, b, c, c]))

    plan = await plans.create_plan_quick_pick(db, "Once", [a, b, c, d])
    with pytest.raises(ValidationError):
        await plans.update_plan(db, plan.id, PlanUpdate(exercise_ids=[a, a, b, c]))
    assert plan.planned_ids == [a, b, c, d]


@pytest.mark.asyncio
async def test_library_fallback_orders_equal_timestamps_by_name(db, add_exercise):
    zeta = await add_exercise("Zeta Row", primary=["Back"])
    alpha = await add_exercise("Alpha Row", primary=["Back"])
    zeta.created_at = alpha.created_at = NOW
    await db.flush()

    assert await assembler.assemble_focus_plan(db, BodyFocus.UPPER) == [alpha.id, zeta.id]
