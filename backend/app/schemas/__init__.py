"""Pydantic Schemas: request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input)
    - Strings are trimmed; blank optional strings become None

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
