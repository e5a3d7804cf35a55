"""User Schemas — registration body."""

from pydantic import BaseModel

JsonScalar = str | int | float | None


class UserCreate(BaseModel):
    """Registration body. password is ignored under the path variant."""
    username: JsonScalar = None
    password: JsonScalar = None
