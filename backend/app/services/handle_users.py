"""User Handlers — registration.

Invariants:
    - Presence checks (400) run before rule checks (422)
    - A password is required, hashed and stored only when the auth strategy needs one
    - Duplicate usernames and store failures share the "Could not create username" message
"""

import logging
from typing import Any

from app.core.errors import ErrorContext, StoreError
from app.core.repository_protocols import AuthStrategy, PasswordHasher, UserRepository
from app.core.validation import as_text, validate_registration

logger = logging.getLogger(__name__)


class UserHandlers:
    """Registration endpoint logic."""

    def __init__(
        self, users: UserRepository, hasher: PasswordHasher, strategy: AuthStrategy,
    ):
        self.users = users
        self.hasher = hasher
        self.strategy = strategy

    async def register(self, username: Any, password: Any) -> dict:
        requires_password = self.strategy.requires_password
        clean_username = validate_registration(username, password, requires_password)

        password_hash = None
        if requires_password:
            try:
                password_hash = await self.hasher.hash(as_text(password))
            except (ValueError, TypeError, RuntimeError) as e:
                logger.error(
                    f"Password hashing failed: {e}",
                    extra={"username": clean_username}, exc_info=True,
                )
                raise StoreError(
                    f"Could not create username {clean_username}", "hash",
                    ErrorContext(username=clean_username),
                )

        user = await self.users.create_user(clean_username, password_hash)
        return {"msg": f"Username {user.username} created."}
