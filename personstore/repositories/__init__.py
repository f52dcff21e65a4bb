"""Repositories — async persistence operations over injected collections.

Invariants:
    - Every driver call wrapped in storage_errors() (infrastructure/database.py)
    - Repositories hold no document state between calls
"""
