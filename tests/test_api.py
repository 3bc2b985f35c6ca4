"""HTTP flow through the FastAPI app against a throwaway SQLite file."""

import asyncio
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from gymlog.db.session import get_db, init_models
from gymlog.main import app

API = "/api/v1"


@pytest.fixture
def client(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}", poolclass=NullPool)
    asyncio.run(init_models(engine))
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    async def override_get_db():
        async with maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_exercises(client, names, type="compound"):
    ids = []
    for name in names:
        r = client.post(f"{API}/exercises", json={"name": name, "type": type, "primary_muscles": ["Chest"]})
        assert r.status_code == 201, r.text
        ids.append(r.json()["id"])
    return ids


def test_health(client):
    assert client.get(f"{API}/health").json()["status"] == "ok"
    ready = client.get(f"{API}/health/ready").json()
    assert ready["database"] == "connected"
    assert ready["active_session_id"] is None


def test_exercise_crud_and_search(client):
    (bench,) = _create_exercises(client, ["Barbell Bench Press"])
    r = client.patch(f"{API}/exercises/{bench}", json={"aliases": ["Flat bench"]})
    assert r.status_code == 200
    assert r.json()["normalized_aliases"] == ["flat bench"]
    assert r.json()["is_custom"] is True

    found = client.get(f"{API}/exercises", params={"q": "flat-bench"}).json()
    assert [e["id"] for e in found] == [bench]
    assert client.get(f"{API}/exercises/{uuid.uuid4()}").status_code == 404


def test_template_validation_maps_to_422(client):
    ids = _create_exercises(client, ["A", "B", "C"])
    r = client.post(f"{API}/templates", json={"name": "Too short", "exercise_ids": ids})
    assert r.status_code == 422
    assert r.json()["detail"] == "Workout templates need at least 4 exercises."


def test_plan_errors(client):
    r = client.post(f"{API}/plans/from-template", json={"template_id": str(uuid.uuid4())})
    assert r.status_code == 404
    assert client.post(f"{API}/plans/suggested").status_code == 422
    assert client.post(f"{API}/plans/from-focus", json={"focus": "lower"}).status_code == 422
    assert client.get(f"{API}/plans/{uuid.uuid4()}").status_code == 404


def test_workout_flow(client):
    ids = _create_exercises(client, ["Bench", "Row", "Press", "Pulldown"])
    template = client.post(f"{API}/templates", json={"name": "Upper A", "exercise_ids": ids}).json()
    plan = client.post(f"{API}/plans/from-template", json={"template_id": template["id"]}).json()
    assert plan["mode"] == "template"
    assert plan["exercise_ids"] == ids

    r = client.post(f"{API}/sessions", json={"plan_id": plan["id"]})
    assert r.status_code == 201, r.text
    session_id = r.json()["id"]

    r = client.post(f"{API}/sessions", json={"plan_id": plan["id"]})
    assert r.status_code == 409
    assert r.json()["detail"] == "A workout is already in progress."
    assert client.get(f"{API}/sessions/active").json()["id"] == session_id

    queue = client.get(f"{API}/sessions/{session_id}/queue").json()
    assert queue["current"]["exercise_id"] == ids[0]
    assert [row["exercise_id"] for row in queue["up_next"]] == ids[1:]

    queue = client.post(f"{API}/sessions/{session_id}/exercises/{ids[0]}/defer").json()
    assert [row["exercise_id"] for row in queue["rows"]] == [*ids[1:], ids[0]]
    assert queue["rows"][-1]["deferred_count"] == 1

    for reps in (8, 6):
        r = client.post(
            f"{API}/sessions/{session_id}/sets",
            json={"exercise_id": ids[1], "reps_completed": reps, "weight": 60, "missed_reps": 8 - reps},
        )
        assert r.status_code == 201
    sets = client.get(f"{API}/sessions/{session_id}/exercises/{ids[1]}/sets").json()
    assert [s["set_index"] for s in sets] == [0, 1]

    r = client.patch(
        f"{API}/sessions/{session_id}/sets/{sets[1]['id']}/intentional-miss", json={"intentional": False}
    )
    assert r.json()["intentional_miss"] is False

    advice = client.get(f"{API}/suggestions/sessions/{session_id}/exercises/{ids[1]}/next-time").json()
    assert advice["action"] == "decrease"
    assert advice["weight"] == 57.5

    rest = client.get(f"{API}/suggestions/exercises/{ids[1]}/rest", params={"missed_reps": True}).json()
    assert rest == {"seconds": 180, "formatted": "3:00"}

    queue = client.post(f"{API}/sessions/{session_id}/exercises/{ids[1]}/complete").json()
    assert queue["current"]["exercise_id"] == ids[2]

    ended = client.post(f"{API}/sessions/{session_id}/end").json()
    assert ended["ended_at"] is not None
    assert client.get(f"{API}/sessions/active").json() is None

    last = client.get(f"{API}/suggestions/exercises/{ids[1]}/last-performance").json()
    assert (last["last_weight"], last["last_reps"]) == (60, 6)

    summary = client.get(f"{API}/sessions/{session_id}/summary").json()
    assert [e["exercise_id"] for e in summary["exercises"]] == [*ids[1:], ids[0]]
    assert summary["exercises"][0]["status"] == "completed"

    assert client.post(f"{API}/sessions", json={"plan_id": plan["id"]}).status_code == 201


def test_session_not_found(client):
    missing = uuid.uuid4()
    assert client.get(f"{API}/sessions/{missing}").status_code == 404
    assert client.post(f"{API}/sessions/{missing}/end").status_code == 404
    assert client.get(f"{API}/sessions/{missing}/summary").status_code == 404
    r = client.post(f"{API}/sessions/{missing}/sets", json={"exercise_id": str(uuid.uuid4()), "reps_completed": 5})
    assert r.status_code == 404
