"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Schemas describe the HTTP boundary; persistence rules live in the storage layer
"""
