"""Pydantic Schemas — declared document shapes and request bodies.

Invariants:
    - Schemas validate at the system boundary (before persistence, API bodies)
    - Field spellings on the wire come from core/domain_types.py

Design Decisions:
    - Separate from models: schemas are contracts, models carry lifecycle state
"""
