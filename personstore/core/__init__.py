"""Core Layer — pure domain logic, no IO, no async, no driver calls.

Invariants:
    - No module in core/ imports from repositories/, services/, api/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: validation and query
      assembly never await, so they always run before the first network call
"""
