"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON bodies; errors use {"Error": message}

Design Decisions:
    - Thin routes delegate multi-document work to services/
"""
