"""User Routes — registration.

Invariants:
    - POST /users answers 200 {msg} on success
    - A missing JSON body is treated like an empty one (missing username → 400)
"""

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_user_handlers
from app.schemas.user import UserCreate
from app.services.handle_users import UserHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.post("")
async def register_user(
    body: UserCreate | None = None,
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Register a username (and password under the header variant)."""
    body = body or UserCreate()
    return await handlers.register(body.username, body.password)
