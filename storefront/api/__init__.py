"""API Layer — FastAPI routes, error handlers and the serverless adapter.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
"""
