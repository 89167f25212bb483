"""API test fixtures — FastAPI app built around the test store + httpx client.

Design Decisions:
    - ASGITransport does not run the lifespan; the store fixture is already connected
"""

import pytest
from httpx import ASGITransport, AsyncClient

from phonebook.main import create_app


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def mary(client):
    """A person created through the API."""
    res = await client.post(
        "/api/persons",
        json={"name": "Mary Poppendieck", "number": "39-23-6423122"},
    )
    assert res.status_code == 200
    return res.json()
