"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the store-assigned integer key — never a raw path string
    - AuthMode has exactly two members; one is active per deployment
    - ExerciseView is the read-only projection returned by exercise queries
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class AuthMode(str, Enum):
    """How exercise endpoints establish the owning user."""
    HEADER = "header"
    PATH = "path"


class ExerciseField(str, Enum):
    """Input fields checked by the validator. Values match the JSON keys."""
    USERNAME = "username"
    PASSWORD = "password"
    DESCRIPTION = "description"
    DURATION = "duration"
    DATE = "date"
    FROM = "from"
    TO = "to"
    LIMIT = "limit"
    USER_ID = "userId"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class UserRef:
    """Resolved owner of an exercise operation.

    username is None under the path variant, where only the id is known.
    """
    id: UserId
    username: str | None = None

    @property
    def label(self) -> str:
        if self.username is not None:
            return self.username
        return f"with ID {self.id}"


@dataclass(frozen=True)
class ExerciseView:
    """Exercise row joined with its owner's username."""
    username: str
    description: str
    duration: str
    date: date

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "description": self.description,
            "duration": self.duration,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class ExerciseQuery:
    """Optional filters for an exercise listing. None means not applied."""
    from_date: date | None = None
    to_date: date | None = None
    limit: int | None = None
