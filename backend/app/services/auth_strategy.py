"""Auth Strategies — how an exercise request establishes its owning user.

Invariants:
    - Exactly one strategy is active per deployment (Settings.auth_mode)
    - HeaderCredentialStrategy: header present → parse → user exists → password verifies
    - PathIdStrategy: userId must match ^\\d+$; no store access, no credential check
    - Unknown user and wrong password are distinct messages with the same 400 status
"""

import logging

from app.core.auth_header import parse_authorization
from app.core.domain_types import AuthMode, UserId, UserRef
from app.core.errors import AuthInvalidError, ErrorContext
from app.core.repository_protocols import AuthStrategy, PasswordHasher, UserRepository
from app.core.validation import escape, validate_user_id

logger = logging.getLogger(__name__)


class HeaderCredentialStrategy:
    """Authorization: <scheme> <username>:<password> on every exercise request."""

    resolves_first = True
    requires_password = True

    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    async def resolve(
        self, authorization: str | None, user_id: str | None = None,
    ) -> UserRef:
        credentials = parse_authorization(authorization)
        # Stored usernames went through the same trim + escape at registration
        username = escape(credentials.username.strip())

        user = await self.users.find_by_username(username)
        if user is None:
            logger.info("Unknown username in credentials", extra={"username": username})
            raise AuthInvalidError(
                AuthInvalidError.UNKNOWN_USER, ErrorContext(username=username),
            )
        if not await self.hasher.verify(credentials.password, user.password_hash):
            logger.info("Password verification failed", extra={"username": username})
            raise AuthInvalidError(
                AuthInvalidError.WRONG_PASSWORD, ErrorContext(username=username),
            )
        return UserRef(UserId(user.id), user.username)


class PathIdStrategy:
    """Numeric user id embedded in the URL. Identity is knowing the id."""

    resolves_first = False
    requires_password = False

    async def resolve(
        self, authorization: str | None, user_id: str | None,
    ) -> UserRef:
        return UserRef(validate_user_id(user_id))


def build_auth_strategy(
    mode: AuthMode, users: UserRepository, hasher: PasswordHasher,
) -> AuthStrategy:
    if mode == AuthMode.PATH:
        return PathIdStrategy()
    return HeaderCredentialStrategy(users, hasher)
