import pytest

from stackhelper.dependencies import get_pet_service
from stackhelper.exceptions import PersistenceError


def create(client, name, friends=None):
    response = client.post("/pets", json={"name": name, "friendsIds": friends or []})
    assert response.status_code == 201
    return int(response.headers["location"].rsplit("/", 1)[1])


class BrokenService:
    resource_name = "pet"

    def count_all(self):
        raise PersistenceError("count", "database is locked")

    def delete_by_id(self, key):
        raise PersistenceError("delete", "database is locked")

    def delete_by_id_list(self, keys):
        raise RuntimeError("boom")


@pytest.fixture
def broken_client(client):
    client.app.dependency_overrides[get_pet_service] = BrokenService
    return client


def test_pet_lifecycle(client):
    response = client.post("/pets", json={"name": "Rex", "friendsIds": []})
    assert response.status_code == 201
    assert response.headers["location"].endswith("/pets/1")

    response = client.get("/pets/1")
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Rex", "friends": []}

    response = client.delete("/pets/1")
    assert response.status_code == 200

    response = client.get("/pets/1")
    assert response.status_code == 404
    assert response.json()["detail"] == "pets '1' not found"


def test_count(client):
    assert client.get("/pets/count").json() == 0
    create(client, "Rex")
    create(client, "Max")
    assert client.get("/pets/count").json() == 2


def test_friends_are_nested(client):
    max_id = create(client, "Max")
    rex_id = create(client, "Rex", friends=[max_id, 404])

    body = client.get(f"/pets/{rex_id}").json()

    assert body["friends"] == [{"id": max_id, "name": "Max", "friends": []}]


def test_list_is_paged_and_sorted(client):
    for name in ("Rex", "Max", "Bella"):
        create(client, name)

    body = client.get("/pets", params={"page": 0, "size": 2, "sort": "-name"}).json()

    assert [p["name"] for p in body["content"]] == ["Rex", "Max"]
    assert body["total_elements"] == 3
    assert body["total_pages"] == 2
    assert body["first"] is True
    assert body["last"] is False
    assert body["sort"] == [{"field": "name", "direction": "DESC"}]


def test_list_defaults(client):
    create(client, "Rex")

    body = client.get("/pets").json()

    assert body["page"] == 0
    assert body["size"] == 20
    assert [p["name"] for p in body["content"]] == ["Rex"]


def test_list_with_search(client):
    for name in ("Rex", "Rexy", "Max"):
        create(client, name)

    response = client.get("/pets", params=[("search", "name:starts_with:Re"), ("sort", "name")])

    assert [p["name"] for p in response.json()["content"]] == ["Rex", "Rexy"]


@pytest.mark.parametrize("params", [
    {"sort": "colour"},
    {"search": "colour:EQUALS:red"},
    {"search": "name:SOUNDS_LIKE:Rex"},
    {"search": "id:GREATER_THAN:one"},
    {"size": 5000},
])
def test_bad_query_is_400(client, params):
    assert client.get("/pets", params=params).status_code == 400


def test_negative_page_is_422(client):
    assert client.get("/pets", params={"page": -1}).status_code == 422


def test_non_integer_key_is_422(client):
    assert client.get("/pets/abc").status_code == 422


def test_invalid_body_is_422(client):
    assert client.post("/pets", json={"name": ""}).status_code == 422


def test_rejected_create_is_204(client):
    create(client, "Rex")

    response = client.post("/pets", json={"name": "Rex"})

    assert response.status_code == 204
    assert "location" not in response.headers
    assert client.get("/pets/count").json() == 1


def test_update(client):
    key = create(client, "Rex")

    response = client.put(f"/pets/{key}", json={"name": "Rexy"})

    assert response.status_code == 201
    assert response.headers["location"].endswith(f"/pets/{key}")
    assert client.get(f"/pets/{key}").json()["name"] == "Rexy"


def test_update_absent_is_204(client):
    response = client.put("/pets/9", json={"name": "Ghost"})

    assert response.status_code == 204
    assert client.get("/pets/count").json() == 0


def test_create_all(client):
    create(client, "Bella")

    response = client.post("/pets/createAll", json=[{"name": "Rex"}, {"name": "Bella"}, {"name": "Max"}])

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert client.get("/pets/count").json() == 3


def test_create_all_nothing_created_is_204(client):
    create(client, "Rex")

    assert client.post("/pets/createAll", json=[{"name": "Rex"}]).status_code == 204


def test_update_all(client):
    rex = create(client, "Rex")
    max_id = create(client, "Max")

    response = client.put("/pets/updateAll", json=[
        {"id": rex, "name": "Rexy"},
        {"id": 404, "name": "Ghost"},
        {"name": "NoKey"},
    ])

    assert response.status_code == 200
    assert response.json() == [rex]
    assert client.get(f"/pets/{max_id}").json()["name"] == "Max"


def test_update_all_nothing_updated_is_204(client):
    assert client.put("/pets/updateAll", json=[{"id": 3, "name": "Ghost"}]).status_code == 204


def test_delete_all_by_keys(client):
    keys = [create(client, name) for name in ("Rex", "Max", "Bella")]

    response = client.request("DELETE", "/pets/deleteAll", json=keys[:2] + [404])

    assert response.status_code == 200
    assert client.get("/pets/count").json() == 1


def test_delete_absent_is_200(client):
    assert client.delete("/pets/42").status_code == 200


def test_delete_failure_is_204(broken_client):
    assert broken_client.delete("/pets/1").status_code == 204
    assert broken_client.request("DELETE", "/pets/deleteAll", json=[1]).status_code == 204


def test_persistence_failure_is_500(broken_client):
    response = broken_client.get("/pets/count")

    assert response.status_code == 500
    assert response.json()["detail"] == "database is locked"


def test_request_id_is_echoed(client):
    response = client.get("/pets/count", headers={"X-Request-ID": "abc-123"})

    assert response.headers["x-request-id"] == "abc-123"
    assert client.get("/pets/count").headers["x-request-id"]
