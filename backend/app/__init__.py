"""Exercise Tracker Application Package — user registration and exercise logging API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
