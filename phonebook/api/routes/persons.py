"""Persons — list, get, create and delete over the person store.

Invariants:
    - Each handler issues exactly one storage call
    - StorageError is never caught here (api/error_handlers.py maps it)
    - GET of an absent id is 404 with an empty body; a malformed id is a CAST error (400)
    - DELETE answers 204 whether or not a record was removed
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from phonebook.api.dependencies import get_person_store
from phonebook.core.repository_protocols import PersonRepository
from phonebook.schemas.person import PersonCreate, PersonResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/persons", tags=["persons"])


@router.get("", response_model=list[PersonResponse])
@router.get("/", response_model=list[PersonResponse], include_in_schema=False)
async def list_persons(store: PersonRepository = Depends(get_person_store)):
    """All persons, in storage order."""
    return await store.find_all()


@router.get("/{person_id}", response_model=None)
async def get_person(
    person_id: str, store: PersonRepository = Depends(get_person_store),
):
    person = await store.find_by_id(person_id)
    if person is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return PersonResponse(**person)


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(
    person_id: str, store: PersonRepository = Depends(get_person_store),
):
    await store.delete_by_id(person_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("", response_model=PersonResponse)
@router.post("/", response_model=PersonResponse, include_in_schema=False)
async def create_person(
    body: PersonCreate, store: PersonRepository = Depends(get_person_store),
):
    """Create a person. Duplicate names are rejected by the store (CONFLICT)."""
    saved = await store.insert(body.name, body.number)
    return PersonResponse(**saved)
