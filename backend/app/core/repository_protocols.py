"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell (services/) via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO (DB, bcrypt in a worker thread)
"""

from datetime import date
from typing import Protocol

from app.core.domain_types import ExerciseQuery, ExerciseView, UserId, UserRef


class UserLike(Protocol):
    """Structural contract for User rows passed between repositories and handlers."""
    id: int
    username: str
    password_hash: str | None


class PasswordHasher(Protocol):
    """Contract for the one-way hash/verify capability."""
    async def hash(self, password: str) -> str: ...
    async def verify(self, password: str, password_hash: str | None) -> bool: ...


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def create_user(
        self, username: str, password_hash: str | None = None,
    ) -> UserLike: ...
    async def find_by_username(self, username: str) -> UserLike | None: ...


class ExerciseRepository(Protocol):
    """Contract for exercise persistence."""
    async def create_exercise(
        self,
        user_id: UserId,
        description: str,
        duration: str,
        exercise_date: date | None = None,
    ) -> object: ...
    async def query_exercises(
        self, user_id: UserId, query: ExerciseQuery,
    ) -> list[ExerciseView]: ...


class AuthStrategy(Protocol):
    """Resolves the owning user of an exercise operation.

    resolves_first tells handlers whether identity is established before
    body validation (header credentials) or after it (path id).
    requires_password tells registration whether a password must be stored.
    """
    resolves_first: bool
    requires_password: bool

    async def resolve(
        self, authorization: str | None, user_id: str | None,
    ) -> UserRef: ...
