"""Dependency Providers — request-scoped wiring of repositories, strategy and handlers.

Invariants:
    - One AsyncSession per request (FastAPI caches get_db within a request)
    - Settings and CredentialService come from app.state, set by create_app()
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.repository_protocols import AuthStrategy
from app.infrastructure.database import get_db
from app.services.auth_strategy import build_auth_strategy
from app.services.credential_service import CredentialService
from app.services.exercise_repository import SqlExerciseRepository
from app.services.handle_exercises import ExerciseHandlers
from app.services.handle_users import UserHandlers
from app.services.user_repository import SqlUserRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credentials


def get_user_repository(db: AsyncSession = Depends(get_db)) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_exercise_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlExerciseRepository:
    return SqlExerciseRepository(db)


def get_auth_strategy(
    settings: Settings = Depends(get_app_settings),
    users: SqlUserRepository = Depends(get_user_repository),
    hasher: CredentialService = Depends(get_credential_service),
) -> AuthStrategy:
    return build_auth_strategy(settings.auth_mode, users, hasher)


def get_user_handlers(
    users: SqlUserRepository = Depends(get_user_repository),
    hasher: CredentialService = Depends(get_credential_service),
    strategy: AuthStrategy = Depends(get_auth_strategy),
) -> UserHandlers:
    return UserHandlers(users, hasher, strategy)


def get_exercise_handlers(
    settings: Settings = Depends(get_app_settings),
    exercises: SqlExerciseRepository = Depends(get_exercise_repository),
    strategy: AuthStrategy = Depends(get_auth_strategy),
) -> ExerciseHandlers:
    return ExerciseHandlers(
        exercises, strategy,
        legacy_confirmation_key=settings.legacy_confirmation_key,
    )
