"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas check shape and types at the system boundary; business rules
      (lengths, point counts, email format) live in core/validation.py
    - Responses use the {success, message?, data?} envelope

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
