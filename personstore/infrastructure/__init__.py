"""Infrastructure Layer — document store client and cross-cutting concerns.

Invariants:
    - Driver exceptions never escape this layer unmapped

Design Decisions:
    - No retries: a failed call surfaces as StorageError and the caller decides
"""
