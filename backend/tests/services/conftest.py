"""Service test fixtures — async DB + FastAPI test clients.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use the test session factory
    - header_client and path_client are separate apps, one per auth mode

Design Decisions:
    - SQLite in-memory with StaticPool: every session sees the same database
    - bcrypt cost 4 in tests
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.config import Settings
from app.core.domain_types import AuthMode
from app.db.base import Base
from app.infrastructure.database import enable_sqlite_foreign_keys, get_db
from app.main import create_app
from app.services.credential_service import CredentialService
from tests.services.api_helpers import TEST_DB_URL, make_settings


@pytest.fixture
async def test_engine():
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def credentials():
    return CredentialService(rounds=4)


async def _serve(settings: Settings, session_factory):
    app = create_app(settings)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def header_client(test_session_factory):
    """Client for a deployment authenticating via the Authorization header."""
    async for c in _serve(make_settings(AuthMode.HEADER), test_session_factory):
        yield c


@pytest.fixture
async def path_client(test_session_factory):
    """Client for a deployment addressing users by numeric id in the URL."""
    async for c in _serve(make_settings(AuthMode.PATH), test_session_factory):
        yield c


@pytest.fixture
async def legacy_client(test_session_factory):
    """Header deployment that returns confirmations under the legacy "error" key."""
    settings = make_settings(AuthMode.HEADER, legacy_confirmation_key=True)
    async for c in _serve(settings, test_session_factory):
        yield c


@pytest.fixture
async def alice(header_client):
    """Register alice/password1 through the API."""
    res = await header_client.post(
        "/api/v1/users", json={"username": "alice", "password": "password1"},
    )
    assert res.status_code == 200
    return {"username": "alice", "password": "password1"}
