"""Person Schemas — request body and response shape for /api/persons.

Invariants:
    - PersonCreate accepts missing name/number; the storage schema decides whether
      the record is valid (ValidationError → 400 with the storage message)
    - PersonResponse.id is the storage id rendered as a string
"""

from pydantic import BaseModel, ConfigDict


class PersonCreate(BaseModel):
    """Create request — unknown keys are ignored, JSON numbers stored as text."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    number: str | None = None


class PersonResponse(BaseModel):
    id: str
    name: str
    number: str
