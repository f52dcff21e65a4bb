"""Services Layer — Person scenarios composed from repository operations.

Invariants:
    - Services never access the collection directly
"""
