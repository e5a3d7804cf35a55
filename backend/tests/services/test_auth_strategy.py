"""Auth Strategies — header credentials vs numeric path id, with in-memory fakes.

Tests cover:
    - Header strategy order: missing header → parse → user lookup → password verify
    - Unknown user and wrong password have distinct messages
    - Path strategy validates the id without touching the store
"""

from dataclasses import dataclass

import pytest

from app.core.domain_types import AuthMode, UserRef
from app.core.errors import AuthInvalidError, AuthMissingError, InvalidIdError
from app.services.auth_strategy import (
    HeaderCredentialStrategy, PathIdStrategy, build_auth_strategy,
)


@dataclass
class _User:
    id: int
    username: str
    password_hash: str | None


class _FakeUsers:
    def __init__(self, *users: _User):
        self.by_name = {u.username: u for u in users}
        self.lookups: list[str] = []

    async def find_by_username(self, username):
        self.lookups.append(username)
        return self.by_name.get(username)


class _FakeHasher:
    """Stores passwords as "hashed:<password>"."""

    async def hash(self, password):
        return f"hashed:{password}"

    async def verify(self, password, password_hash):
        return password_hash == f"hashed:{password}"


@pytest.fixture
def users():
    return _FakeUsers(_User(1, "alice", "hashed:password1"))


@pytest.fixture
def strategy(users):
    return HeaderCredentialStrategy(users, _FakeHasher())


async def test_header_strategy_resolves_user(strategy):
    ref = await strategy.resolve("Basic alice:password1")
    assert ref == UserRef(1, "alice")


async def test_missing_header_rejected_before_lookup(strategy, users):
    with pytest.raises(AuthMissingError):
        await strategy.resolve(None)
    assert users.lookups == []


async def test_unknown_user(strategy):
    with pytest.raises(AuthInvalidError) as exc:
        await strategy.resolve("Basic mallory:password1")
    assert exc.value.message == "Invalid username or user does not exist"


async def test_wrong_password(strategy):
    with pytest.raises(AuthInvalidError) as exc:
        await strategy.resolve("Basic alice:password2")
    assert exc.value.message == "Wrong password for username"


async def test_header_username_is_normalized_before_lookup(strategy, users):
    await strategy.resolve("Basic alice:password1")
    with pytest.raises(AuthInvalidError):
        await strategy.resolve("Basic a<b:password1")
    assert users.lookups == ["alice", "a&lt;b"]


async def test_path_strategy_returns_id_only():
    ref = await PathIdStrategy().resolve(None, "7")
    assert ref.id == 7
    assert ref.username is None


async def test_path_strategy_rejects_non_numeric_id():
    with pytest.raises(InvalidIdError):
        await PathIdStrategy().resolve(None, "abc")


def test_strategy_flags():
    header = HeaderCredentialStrategy(_FakeUsers(), _FakeHasher())
    assert header.resolves_first and header.requires_password
    path = PathIdStrategy()
    assert not path.resolves_first and not path.requires_password


def test_build_auth_strategy_by_mode(users):
    hasher = _FakeHasher()
    assert isinstance(build_auth_strategy(AuthMode.HEADER, users, hasher), HeaderCredentialStrategy)
    assert isinstance(build_auth_strategy(AuthMode.PATH, users, hasher), PathIdStrategy)
