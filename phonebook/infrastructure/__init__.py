"""Infrastructure Layer — database access and logging setup.

Invariants:
    - Storage failures leave this layer only as StorageError
"""
