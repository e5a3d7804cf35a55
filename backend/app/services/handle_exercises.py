"""Exercise Handlers — log and list exercises for the resolved owner.

Invariants:
    - Create: header variant authenticates before field validation; path variant
      validates fields and date before checking the userId format
    - List: owner resolved first, then from/to dates, then limit
    - Invalid input never reaches the repository
    - A failing listing query, owner lookup included, answers 404, never 400

Design Decisions:
    - Written once, parameterized by AuthStrategy
    - Confirmation key is "msg"; legacy_confirmation_key restores the old "error" key
"""

import logging
from typing import Any

from app.core.errors import ExerciseQueryError, StoreError
from app.core.repository_protocols import AuthStrategy, ExerciseRepository
from app.core.validation import validate_exercise_input, validate_query_filters

logger = logging.getLogger(__name__)


class ExerciseHandlers:
    """Create-exercise and list-exercises endpoint logic."""

    def __init__(
        self,
        exercises: ExerciseRepository,
        strategy: AuthStrategy,
        legacy_confirmation_key: bool = False,
    ):
        self.exercises = exercises
        self.strategy = strategy
        self.confirmation_key = "error" if legacy_confirmation_key else "msg"

    async def create(
        self,
        authorization: str | None,
        user_id: str | None,
        description: Any,
        duration: Any,
        date_raw: Any,
    ) -> dict:
        if self.strategy.resolves_first:
            owner = await self.strategy.resolve(authorization, user_id)
            data = validate_exercise_input(description, duration, date_raw)
        else:
            data = validate_exercise_input(description, duration, date_raw)
            owner = await self.strategy.resolve(authorization, user_id)

        await self.exercises.create_exercise(
            owner.id, data.description, data.duration, data.exercise_date,
        )
        logger.info(
            "Exercise created",
            extra={"user_id": owner.id, "username": owner.username},
        )
        return {self.confirmation_key: f"Exercise created for user {owner.label}"}

    async def list(
        self,
        authorization: str | None,
        user_id: str | None,
        from_raw: Any,
        to_raw: Any,
        limit_raw: Any,
    ) -> dict:
        try:
            owner = await self.strategy.resolve(authorization, user_id)
        except StoreError as e:
            raise ExerciseQueryError(e.context.username or "")
        filters = validate_query_filters(from_raw, to_raw, limit_raw)
        try:
            views = await self.exercises.query_exercises(owner.id, filters)
        except StoreError:
            raise ExerciseQueryError(owner.label)
        return {"exercises": [view.to_dict() for view in views]}
