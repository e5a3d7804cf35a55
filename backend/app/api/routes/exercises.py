"""Exercise Routes — two mutually exclusive routers, one mounted per deployment.

Invariants:
    - header_router: /users/exercises, owner from the Authorization header
    - path_router: /users/{user_id}/exercises, owner from the URL
    - user_id is taken as a raw string; its format is checked by the validator (422)
    - limit is taken as a raw string; its format is checked by the validator (422)
"""

from fastapi import APIRouter, Depends, Header, Query

from app.api.dependencies import get_exercise_handlers
from app.schemas.exercise import ExerciseCreate
from app.services.handle_exercises import ExerciseHandlers

header_router = APIRouter(prefix="/users", tags=["exercises"])
path_router = APIRouter(prefix="/users", tags=["exercises"])


# ─── Header variant ─────────────────────────────────────────────

@header_router.post("/exercises")
async def create_exercise_with_credentials(
    body: ExerciseCreate | None = None,
    authorization: str | None = Header(None),
    handlers: ExerciseHandlers = Depends(get_exercise_handlers),
):
    body = body or ExerciseCreate()
    return await handlers.create(
        authorization, None, body.description, body.duration, body.date,
    )


@header_router.get("/exercises")
async def list_exercises_with_credentials(
    from_date: str | None = Query(None, alias="from"),
    to_date: str | None = Query(None, alias="to"),
    limit: str | None = Query(None),
    authorization: str | None = Header(None),
    handlers: ExerciseHandlers = Depends(get_exercise_handlers),
):
    return await handlers.list(authorization, None, from_date, to_date, limit)


# ─── Path variant ───────────────────────────────────────────────

@path_router.post("/{user_id}/exercises")
async def create_exercise_for_user_id(
    user_id: str,
    body: ExerciseCreate | None = None,
    handlers: ExerciseHandlers = Depends(get_exercise_handlers),
):
    body = body or ExerciseCreate()
    return await handlers.create(
        None, user_id, body.description, body.duration, body.date,
    )


@path_router.get("/{user_id}/exercises")
async def list_exercises_for_user_id(
    user_id: str,
    from_date: str | None = Query(None, alias="from"),
    to_date: str | None = Query(None, alias="to"),
    limit: str | None = Query(None),
    handlers: ExerciseHandlers = Depends(get_exercise_handlers),
):
    return await handlers.list(None, user_id, from_date, to_date, limit)
