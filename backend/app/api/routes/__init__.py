"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter(s) with prefix and tags
    - Routes never contain business logic (delegate to services/handle_*)
"""
