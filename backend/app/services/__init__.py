"""Services Layer — repositories, credential hashing, auth strategies, and endpoint handlers.

Invariants:
    - Repositories are the only code that issues SQL
    - Handlers compose validator → auth strategy → repository, never touch HTTP objects
"""
