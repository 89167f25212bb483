"""Phonebook API Package — REST API over person records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
