"""Exercise Repository — inserts exercise rows and lists them joined with their owner.

Invariants:
    - create_exercise is a single INSERT; a missing owner fails on the foreign key
    - An omitted date leaves the column to its default (current UTC date)
    - from/to filters are inclusive; absent filters are not applied
    - Listing order is date ASC, then id ASC; limit applies after ordering
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import ExerciseQuery, ExerciseView, UserId
from app.core.errors import ErrorContext, StoreError
from app.models.exercise import Exercise
from app.models.user import User

logger = logging.getLogger(__name__)


class SqlExerciseRepository:
    """ExerciseRepository backed by the exercises table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_exercise(
        self,
        user_id: UserId,
        description: str,
        duration: str,
        exercise_date: date | None = None,
    ) -> Exercise:
        exercise = Exercise(
            user_id=user_id, description=description, duration=duration,
        )
        if exercise_date is not None:
            exercise.date = exercise_date
        self.db.add(exercise)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Failed to create exercise: {e}",
                extra={"user_id": user_id}, exc_info=True,
            )
            raise StoreError(
                "Could not create exercise.", "insert",
                ErrorContext(user_id=user_id),
            )
        return exercise

    async def query_exercises(
        self, user_id: UserId, query: ExerciseQuery,
    ) -> list[ExerciseView]:
        stmt = (
            select(
                User.username,
                Exercise.description,
                Exercise.duration,
                Exercise.date,
            )
            .join(User, User.id == Exercise.user_id)
            .where(Exercise.user_id == user_id)
        )
        if query.from_date is not None:
            stmt = stmt.where(Exercise.date >= query.from_date)
        if query.to_date is not None:
            stmt = stmt.where(Exercise.date <= query.to_date)
        stmt = stmt.order_by(Exercise.date.asc(), Exercise.id.asc())
        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Exercise query failed: {e}",
                extra={"user_id": user_id}, exc_info=True,
            )
            raise StoreError("Could not query exercises", "select")

        return [
            ExerciseView(
                username=row.username,
                description=row.description,
                duration=row.duration,
                date=row.date,
            )
            for row in result.all()
        ]
