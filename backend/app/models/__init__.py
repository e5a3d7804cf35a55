"""ORM Models — SQLAlchemy declarative models for users and exercises.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the owner; every Exercise row references one user

Design Decisions:
    - One file per entity
    - All models imported here so relationship() string references resolve
      and Base.metadata is complete before create_all
"""

from app.models.user import User  # noqa: F401
from app.models.exercise import Exercise  # noqa: F401
