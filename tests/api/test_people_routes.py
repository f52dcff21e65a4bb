"""People Routes — verifies HTTP mapping of repository operations and errors.

Invariants:
    - Validation failures → 400 with the failing field
    - Single-document misses → 404; multi-document misses → 200 with empty results
    - Malformed identities → 400, storage outages → 503
"""

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

JOHN = {"name": "John Doe", "age": 30, "favoriteFoods": ["pizza", "burger"]}


async def test_create_person_returns_201_with_id(client):
    res = await client.post("/api/v1/people", json=JOHN)
    assert res.status_code == 201
    body = res.json()
    assert ObjectId.is_valid(body["id"])
    assert body["favoriteFoods"] == ["pizza", "burger"]


async def test_create_person_without_name_is_400(client, collection):
    res = await client.post("/api/v1/people", json={"age": 3})
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "name"
    assert collection.calls == []


async def test_bulk_create(client):
    res = await client.post("/api/v1/people/bulk", json=[{"name": "A"}, {"name": "B"}])
    assert res.status_code == 201
    assert [p["name"] for p in res.json()["people"]] == ["A", "B"]


async def test_list_people_by_name_and_food(client, burrito_fans):
    res = await client.get("/api/v1/people", params={"food": "burrito", "name": "Zed"})
    assert [p["name"] for p in res.json()["people"]] == ["Zed"]
    res = await client.get("/api/v1/people", params={"name": "Nobody"})
    assert res.status_code == 200
    assert res.json()["people"] == []


async def test_search_applies_all_stages(client, burrito_fans):
    res = await client.get("/api/v1/people/search", params={
        "food": "burrito", "sort": "name", "limit": 2, "exclude": "age",
    })
    assert res.status_code == 200
    people = res.json()["people"]
    assert [p["name"] for p in people] == ["Ann", "Carl"]
    assert all("age" not in p for p in people)


async def test_search_rejects_excluding_identity(client):
    res = await client.get("/api/v1/people/search", params={"exclude": "id"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_QUERY"


async def test_first_by_food(client, burrito_fans):
    res = await client.get("/api/v1/people/first", params={"food": "sushi"})
    assert res.json()["name"] == "Mary"
    res = await client.get("/api/v1/people/first", params={"food": "kale"})
    assert res.status_code == 404


async def test_get_person(client, repository):
    created = await repository.create_one(JOHN)
    res = await client.get(f"/api/v1/people/{created.id}")
    assert res.status_code == 200
    assert res.json()["name"] == "John Doe"


async def test_get_missing_person_is_404(client):
    res = await client.get(f"/api/v1/people/{ObjectId()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_malformed_id_is_400(client):
    res = await client.get("/api/v1/people/not-an-id")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "STORAGE_ERROR"


async def test_add_favorite_food(client, repository):
    created = await repository.create_one(JOHN)
    res = await client.post(
        f"/api/v1/people/{created.id}/favorite-foods", json={"food": "hamburger"},
    )
    assert res.status_code == 200
    assert res.json()["favoriteFoods"] == ["pizza", "burger", "hamburger"]


async def test_patch_by_name_returns_updated(client, repository):
    await repository.create_one(JOHN)
    res = await client.patch("/api/v1/people/by-name/John Doe", json={"age": 20})
    assert res.status_code == 200
    assert res.json()["age"] == 20
    res = await client.patch("/api/v1/people/by-name/Nobody", json={"age": 20})
    assert res.status_code == 404


async def test_delete_person_twice(client, repository):
    created = await repository.create_one(JOHN)
    res = await client.delete(f"/api/v1/people/{created.id}")
    assert res.status_code == 200
    assert res.json()["name"] == "John Doe"
    res = await client.delete(f"/api/v1/people/{created.id}")
    assert res.status_code == 404


async def test_delete_by_name_zero_matches_is_ok(client):
    res = await client.delete("/api/v1/people", params={"name": "Mary"})
    assert res.status_code == 200
    assert res.json() == {"deleted": 0}


async def test_storage_outage_is_503(client, collection):
    collection.fail_with(ServerSelectionTimeoutError("no servers"))
    res = await client.post("/api/v1/people", json=JOHN)
    assert res.status_code == 503
    assert "no servers" not in res.text
