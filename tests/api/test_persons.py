"""Persons Routes — create, read and delete over a real (SQLite) store.

Invariants:
    - Created persons are retrievable by id with the same name/number
    - Absent ids → 404 empty body; malformed ids → 400 malformatted id
    - DELETE is idempotent (204 every time)
    - Duplicate names rejected with 400 name must be unique
"""

import asyncio
from uuid import uuid4


async def test_list_empty_returns_empty_array(client):
    res = await client.get("/api/persons")
    assert res.status_code == 200
    assert res.json() == []


async def test_create_returns_saved_person_with_id(client):
    res = await client.post(
        "/api/persons",
        json={"name": "Mary Poppendieck", "number": "39-23-6423122"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["id"]
    assert body["name"] == "Mary Poppendieck"
    assert body["number"] == "39-23-6423122"


async def test_created_person_listed_exactly_once(client, mary):
    res = await client.get("/api/persons")
    assert res.status_code == 200
    matches = [p for p in res.json() if p["id"] == mary["id"]]
    assert matches == [mary]


async def test_get_by_id_returns_same_record(client, mary):
    res = await client.get(f"/api/persons/{mary['id']}")
    assert res.status_code == 200
    assert res.json() == mary


async def test_get_absent_id_returns_404_with_empty_body(client):
    res = await client.get(f"/api/persons/{uuid4()}")
    assert res.status_code == 404
    assert res.content == b""


async def test_get_malformed_id_returns_400(client):
    res = await client.get("/api/persons/5c41c90e84d891c15dfa3431")
    assert res.status_code == 400
    assert res.json() == {"error": "malformatted id"}


async def test_delete_returns_204_and_removes_person(client, mary):
    res = await client.delete(f"/api/persons/{mary['id']}")
    assert res.status_code == 204
    assert res.content == b""

    res = await client.get(f"/api/persons/{mary['id']}")
    assert res.status_code == 404


async def test_delete_twice_returns_204_both_times(client, mary):
    first = await client.delete(f"/api/persons/{mary['id']}")
    second = await client.delete(f"/api/persons/{mary['id']}")
    assert first.status_code == 204
    assert second.status_code == 204


async def test_delete_malformed_id_returns_400(client):
    res = await client.delete("/api/persons/not-an-id")
    assert res.status_code == 400
    assert res.json() == {"error": "malformatted id"}


async def test_duplicate_name_rejected_and_first_kept(client):
    first = await client.post(
        "/api/persons", json={"name": "Ada", "number": "040-123456"},
    )
    second = await client.post(
        "/api/persons", json={"name": "Ada", "number": "040-999999"},
    )
    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json() == {"error": "name must be unique"}

    res = await client.get(f"/api/persons/{first.json()['id']}")
    assert res.status_code == 200
    assert res.json()["number"] == "040-123456"

    persons = (await client.get("/api/persons")).json()
    assert [p["name"] for p in persons] == ["Ada"]


async def test_missing_name_is_storage_validation_error(client):
    res = await client.post("/api/persons", json={"number": "040-123456"})
    assert res.status_code == 400
    assert res.json() == {
        "error": "Person validation failed: name: Path `name` is required.",
    }


async def test_missing_both_fields_names_both_paths(client):
    res = await client.post("/api/persons", json={})
    assert res.status_code == 400
    message = res.json()["error"]
    assert "Path `name` is required." in message
    assert "Path `number` is required." in message


async def test_invalid_json_body_returns_400(client):
    res = await client.post(
        "/api/persons",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert "error" in res.json()


async def test_non_string_name_returns_400(client):
    res = await client.post(
        "/api/persons", json={"name": 42, "number": "040-123456"},
    )
    assert res.status_code == 400
    assert res.json()["error"].startswith("body.name")


async def test_extra_fields_are_ignored(client):
    res = await client.post(
        "/api/persons",
        json={"name": "Arto Hellas", "number": "040-123456", "important": True},
    )
    assert res.status_code == 200
    assert set(res.json()) == {"id", "name", "number"}


async def test_numeric_number_is_stored_as_text(client):
    res = await client.post("/api/persons", json={"name": "Ada", "number": 12345})
    assert res.status_code == 200
    assert res.json()["number"] == "12345"

    stored = await client.get(f"/api/persons/{res.json()['id']}")
    assert stored.json()["number"] == "12345"


async def test_object_number_still_rejected(client):
    res = await client.post(
        "/api/persons", json={"name": "Ada", "number": {"home": "040-1"}},
    )
    assert res.status_code == 400
    assert res.json()["error"].startswith("body.number")


async def test_long_name_and_number_accepted(client):
    name = "N" * 500
    number = "0" * 300
    res = await client.post("/api/persons", json={"name": name, "number": number})
    assert res.status_code == 200
    assert res.json()["name"] == name
    assert res.json()["number"] == number


async def test_concurrent_creates_with_same_name_only_one_succeeds(client):
    responses = await asyncio.gather(*(
        client.post("/api/persons", json={"name": "Ada", "number": f"040-{i}"})
        for i in range(5)
    ))
    statuses = sorted(r.status_code for r in responses)
    assert statuses == [200, 400, 400, 400, 400]
    for res in responses:
        if res.status_code == 400:
            assert res.json() == {"error": "name must be unique"}

    persons = (await client.get("/api/persons")).json()
    assert [p["name"] for p in persons] == ["Ada"]


async def test_trailing_slash_routes_answer_directly(client, mary):
    listed = await client.get("/api/persons/")
    assert listed.status_code == 200
    assert listed.json() == [mary]

    created = await client.post(
        "/api/persons/", json={"name": "Grace", "number": "040-2"},
    )
    assert created.status_code == 200
    assert created.json()["name"] == "Grace"
