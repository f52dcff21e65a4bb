"""Document Models — in-memory representations of stored documents.

Invariants:
    - Models never talk to the store; the repository hydrates and persists them
"""
