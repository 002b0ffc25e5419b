"""Core Layer — pure domain logic, no IO, no async, no SDK imports.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/ or client/
    - All functions are pure and deterministic
"""
