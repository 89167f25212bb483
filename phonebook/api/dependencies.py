"""Route Dependencies — resolve the storage client injected by create_app."""

from fastapi import Request

from phonebook.core.repository_protocols import PersonRepository


def get_person_store(request: Request) -> PersonRepository:
    """FastAPI dependency returning the app-wide person store."""
    return request.app.state.person_store
