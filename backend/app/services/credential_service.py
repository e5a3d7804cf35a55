"""Credential Service — bcrypt hashing and verification via passlib.

Invariants:
    - hash() and verify() apply the same normalization (trim + escape)
    - verify() never raises for a bad password, a NULL hash or a malformed hash: it returns False
    - Hashing work runs in a worker thread; only the calling request waits on it
"""

import asyncio
import logging

from passlib.context import CryptContext

from app.core.validation import escape

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


def normalize_password(password: str) -> str:
    """Registration stores the hash of the trimmed, escaped password."""
    return escape(password.strip())


class CredentialService:
    """One-way password hashing behind the PasswordHasher protocol."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(
            self._context.hash, normalize_password(password),
        )

    async def verify(self, password: str, password_hash: str | None) -> bool:
        if not password_hash:
            return False
        try:
            return await asyncio.to_thread(
                self._context.verify, normalize_password(password), password_hash,
            )
        except (ValueError, TypeError) as e:
            logger.warning(f"Stored password hash could not be verified: {e}")
            return False
