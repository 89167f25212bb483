"""Core Layer — domain types, error kinds and boundary protocols. No IO, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
"""
