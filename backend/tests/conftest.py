"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or pay production bcrypt cost
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
