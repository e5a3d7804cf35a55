"""Pydantic Schemas — request body shapes for API endpoints.

Invariants:
    - Schemas only describe shape; field rules live in core/validation.py
    - Every field is optional so missing fields reach the validator (400/422), not a 400 parse error

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
