"""API Layer — FastAPI routes, dependencies, middleware and error handlers.

Invariants:
    - Routes registered explicitly in create_app() (no auto-discovery)
    - All endpoints return JSON bodies
"""
