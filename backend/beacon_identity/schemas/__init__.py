"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary; core entities validate again on construction
    - Separate from models: schemas are API contracts, models are persistence
"""
