"""Exercise ORM — one logged activity owned by a user.

Invariants:
    - user_id must reference an existing users.id (foreign key)
    - description and duration are non-empty, stored as validated text
    - date defaults to the current UTC date when the client sends none
    - Rows are never updated after insert
"""

import datetime as dt
from datetime import datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


def _today() -> dt.date:
    return datetime.now(timezone.utc).date()


class Exercise(Base):
    """Logged exercise."""
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[str] = mapped_column(String(32), nullable=False)
    date: Mapped[dt.date] = mapped_column(
        Date, nullable=False, default=_today, server_default=func.current_date(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship(
        "User", back_populates="exercises", lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<Exercise id={self.id!r} user_id={self.user_id!r} date={self.date!r}>"
