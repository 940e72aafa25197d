"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies)
    - Field lists mirror TRUCK_FIELDS / LOAD_FIELDS in core/domain_types.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
