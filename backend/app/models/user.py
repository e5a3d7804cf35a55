"""User ORM — registered owners of exercise logs.

Invariants:
    - id is an integer primary key assigned by the store
    - username is unique and non-nullable
    - password_hash is NULL for users registered under the path variant
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class User(Base):
    """Registered user. Immutable after creation."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False,
    )
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    exercises: Mapped[list["Exercise"]] = relationship(
        "Exercise", back_populates="user", lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id!r} username={self.username!r}>"
