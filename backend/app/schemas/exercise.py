"""Exercise Schemas — create-exercise body.

Invariants:
    - duration may arrive as a JSON number or string; it is stored as text
    - date is optional; blank and absent both mean "use the current date"
"""

from pydantic import BaseModel

from app.schemas.user import JsonScalar


class ExerciseCreate(BaseModel):
    description: JsonScalar = None
    duration: JsonScalar = None
    date: JsonScalar = None
