"""Header Variant Exercises — POST/GET /api/v1/users/exercises with Authorization.

Invariants:
    - Auth checks (400) run before field validation (422) on create
    - Invalid dates in date/from/to are 422 and never reach the store
    - Query filters are inclusive; limit caps rows; results ordered by date
"""

import base64
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select, text

from app.core.errors import StoreError
from app.models.exercise import Exercise
from app.services.exercise_repository import SqlExerciseRepository
from tests.services.api_helpers import basic_auth

URL = "/api/v1/users/exercises"


async def _log(client, auth, description, duration, day=None):
    body = {"description": description, "duration": duration}
    if day is not None:
        body["date"] = day
    res = await client.post(URL, json=body, headers=auth)
    assert res.status_code == 200, res.json()
    return res


async def _count_exercises(session_factory) -> int:
    async with session_factory() as db:
        return (await db.execute(select(func.count(Exercise.id)))).scalar_one()


# ─── create ─────────────────────────────────────────────────────

async def test_create_then_list_single_exercise(header_client, alice):
    auth = basic_auth(**alice)
    res = await header_client.post(
        URL, json={"description": "run", "duration": "30"}, headers=auth,
    )
    assert res.status_code == 200
    assert res.json() == {"msg": "Exercise created for user alice"}

    res = await header_client.get(URL, headers=auth)
    assert res.status_code == 200
    exercises = res.json()["exercises"]
    assert len(exercises) == 1
    assert exercises[0]["username"] == "alice"
    assert exercises[0]["description"] == "run"
    assert exercises[0]["duration"] == "30"
    assert exercises[0]["date"] == datetime.now(timezone.utc).date().isoformat()


async def test_create_with_explicit_date(header_client, alice):
    auth = basic_auth(**alice)
    await _log(header_client, auth, "swim", 45, "2024-06-01")
    res = await header_client.get(URL, headers=auth)
    assert res.json()["exercises"][0]["date"] == "2024-06-01"
    assert res.json()["exercises"][0]["duration"] == "45"


async def test_create_without_authorization(header_client, alice):
    res = await header_client.post(URL, json={"description": "run", "duration": "30"})
    assert res.status_code == 400
    assert res.json()["error"] == "Authorization credentials not found"


async def test_create_for_unknown_user(header_client, alice):
    res = await header_client.post(
        URL, json={"description": "run", "duration": "30"},
        headers=basic_auth("mallory", "password1"),
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid username or user does not exist"


async def test_create_with_wrong_password(header_client, alice):
    res = await header_client.post(
        URL, json={"description": "run", "duration": "30"},
        headers=basic_auth("alice", "wrongpassword"),
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Wrong password for username"


async def test_auth_is_checked_before_fields(header_client, alice):
    res = await header_client.post(
        URL, json={"description": ""}, headers=basic_auth("alice", "nope-nope"),
    )
    assert res.status_code == 400


async def test_create_with_missing_fields_is_422(header_client, alice, test_session_factory):
    res = await header_client.post(
        URL, json={"description": "run"}, headers=basic_auth(**alice),
    )
    assert res.status_code == 422
    assert res.json()["error"] == "Invalid input data"
    assert res.json()["fields"] == ["duration"]
    assert await _count_exercises(test_session_factory) == 0


async def test_create_with_invalid_date_is_422(header_client, alice, test_session_factory):
    res = await header_client.post(
        URL, json={"description": "run", "duration": "30", "date": "not-a-date"},
        headers=basic_auth(**alice),
    )
    assert res.status_code == 422
    assert res.json()["error"] == "Invalid date"
    assert await _count_exercises(test_session_factory) == 0


async def test_create_store_failure_is_400(header_client, alice, monkeypatch):
    async def _fail(self, *args, **kwargs):
        raise StoreError("Could not create exercise.", "insert")

    monkeypatch.setattr(SqlExerciseRepository, "create_exercise", _fail)
    res = await header_client.post(
        URL, json={"description": "run", "duration": "30"}, headers=basic_auth(**alice),
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Could not create exercise."


async def test_legacy_confirmation_key(legacy_client, alice):
    res = await legacy_client.post(
        URL, json={"description": "run", "duration": "30"}, headers=basic_auth(**alice),
    )
    assert res.status_code == 200
    assert res.json() == {"error": "Exercise created for user alice"}


# ─── list ───────────────────────────────────────────────────────

@pytest.fixture
async def logged(header_client, alice):
    auth = basic_auth(**alice)
    await _log(header_client, auth, "swim", "45", "2024-02-05")
    await _log(header_client, auth, "run", "30", "2024-01-10")
    await _log(header_client, auth, "bike", "60", "2024-01-20")
    return auth


async def test_list_without_authorization(header_client, alice):
    res = await header_client.get(URL)
    assert res.status_code == 400


async def test_list_with_wrong_password(header_client, alice):
    res = await header_client.get(URL, headers=basic_auth("alice", "wrongpassword"))
    assert res.status_code == 400
    assert res.json()["error"] == "Wrong password for username"


async def test_list_is_ordered_by_date(header_client, logged):
    res = await header_client.get(URL, headers=logged)
    assert [e["description"] for e in res.json()["exercises"]] == ["run", "bike", "swim"]


async def test_list_date_range_is_inclusive(header_client, logged):
    res = await header_client.get(
        URL, params={"from": "2024-01-10", "to": "2024-01-20"}, headers=logged,
    )
    assert res.status_code == 200
    assert [e["description"] for e in res.json()["exercises"]] == ["run", "bike"]


async def test_list_from_after_all_dates_is_empty(header_client, logged):
    res = await header_client.get(URL, params={"from": "2030-01-01"}, headers=logged)
    assert res.status_code == 200
    assert res.json() == {"exercises": []}


@pytest.mark.parametrize("limit", [0, 1, 2, 5])
async def test_list_limit_caps_rows(header_client, logged, limit):
    res = await header_client.get(URL, params={"limit": limit}, headers=logged)
    assert res.status_code == 200
    assert len(res.json()["exercises"]) == min(limit, 3)


@pytest.mark.parametrize("params, message", [
    ({"from": "not-a-date"}, "Invalid start date"),
    ({"to": "not-a-date"}, "Invalid end date"),
    ({"limit": "many"}, "Invalid limit"),
])
async def test_list_invalid_filters_are_422(header_client, logged, params, message):
    res = await header_client.get(URL, params=params, headers=logged)
    assert res.status_code == 422
    assert res.json()["error"] == message


async def test_list_only_returns_own_exercises(header_client, logged):
    await header_client.post(
        "/api/v1/users", json={"username": "bob", "password": "password2"},
    )
    bob = basic_auth("bob", "password2")
    await _log(header_client, bob, "yoga", "20", "2024-01-15")

    res = await header_client.get(URL, headers=logged)
    assert "yoga" not in [e["description"] for e in res.json()["exercises"]]
    res = await header_client.get(URL, headers=bob)
    assert [e["description"] for e in res.json()["exercises"]] == ["yoga"]


async def test_list_query_failure_is_404(header_client, logged, monkeypatch):
    async def _fail(self, *args, **kwargs):
        raise StoreError("Could not query exercises", "select")

    monkeypatch.setattr(SqlExerciseRepository, "query_exercises", _fail)
    res = await header_client.get(URL, headers=logged)
    assert res.status_code == 404
    assert res.json()["error"] == "Exercises for user alice not found."


async def test_base64_basic_token_is_accepted(header_client, alice):
    token = base64.b64encode(b"alice:password1").decode()
    res = await header_client.get(URL, headers={"Authorization": f"Basic {token}"})
    assert res.status_code == 200
    assert res.json() == {"exercises": []}


async def test_list_limit_beyond_64_bits_is_422(header_client, logged):
    res = await header_client.get(
        URL, params={"limit": "99999999999999999999"}, headers=logged,
    )
    assert res.status_code == 422
    assert res.json()["error"] == "Invalid limit"


async def test_list_user_lookup_failure_is_404(header_client, logged, test_engine):
    async with test_engine.begin() as conn:
        await conn.execute(text("DROP TABLE exercises"))
        await conn.execute(text("DROP TABLE users"))

    res = await header_client.get(URL, headers=logged)
    assert res.status_code == 404
    assert res.json()["error"] == "Exercises for user alice not found."


async def test_list_auth_errors_stay_400_when_store_is_up(header_client, logged):
    res = await header_client.get(URL, headers=basic_auth("mallory", "password1"))
    assert res.status_code == 400
