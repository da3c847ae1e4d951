from app import models

API = "/api/v1/partners"


def test_create_partner(client, partner_payload):
    response = client.post(API, json=partner_payload)
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "alice"
    assert body["code"] == "P1"
    assert body["bonusStatus"] == "NONE"
    assert body["createdAt"].endswith("Z")
    assert "updatedAt" not in body


def test_duplicate_username_conflicts(client, db, partner_payload):
    assert client.post(API, json=partner_payload).status_code == 201

    response = client.post(API, json={**partner_payload, "code": "P2"})
    assert response.status_code == 409
    body = response.json()
    assert body["field"] == "username"
    assert body["error"] == "Conflict"
    assert db.query(models.Partner).count() == 1


def test_short_codes_are_accepted(client):
    response = client.post(API, json={
        "name": "Alice",
        "username": "al",
        "requisites": "4276",
        "requisiteType": "Crypto",
        "code": "P",
    })
    assert response.status_code == 201
    assert response.json()["code"] == "P"
    assert client.get(f"{API}/search/by-code", params={"code": "P"}).json()["username"] == "al"


def test_duplicate_code_conflicts(client, db, partner_payload):
    client.post(API, json=partner_payload)

    response = client.post(API, json={**partner_payload, "username": "bob"})
    assert response.status_code == 409
    assert response.json()["field"] == "code"
    assert db.query(models.Partner).count() == 1


def test_invalid_requisite_type(client, partner_payload):
    response = client.post(API, json={**partner_payload, "requisiteType": "Cash"})
    assert response.status_code == 400


def test_update_allows_own_values(client, partner_payload):
    partner_id = client.post(API, json=partner_payload).json()["id"]

    response = client.patch(f"{API}/{partner_id}", json={"username": "alice", "name": "Alice B."})
    assert response.status_code == 200
    assert response.json()["name"] == "Alice B."


def test_update_conflicts_with_other_partner(client, partner_payload):
    client.post(API, json=partner_payload)
    other_id = client.post(API, json={**partner_payload, "username": "bob", "code": "P2"}).json()["id"]

    response = client.patch(f"{API}/{other_id}", json={"code": "P1"})
    assert response.status_code == 409
    assert response.json()["field"] == "code"


def test_update_rejects_null_on_required_field(client, partner_payload):
    partner_id = client.post(API, json=partner_payload).json()["id"]

    response = client.patch(f"{API}/{partner_id}", json={"name": None})
    assert response.status_code == 400
    assert response.json()["field"] == "name"


def test_list_search_and_order(client, partner_payload):
    client.post(API, json=partner_payload)
    client.post(API, json={**partner_payload, "username": "alina", "code": "P2"})
    client.post(API, json={**partner_payload, "username": "bob", "code": "P3"})

    body = client.get(API, params={"search": "AL"}).json()
    assert body["total"] == 2
    assert [p["username"] for p in body["data"]] == ["alina", "alice"]


def test_search_by_code_and_username(client, partner_payload):
    client.post(API, json=partner_payload)

    assert client.get(f"{API}/search/by-code", params={"code": "P1"}).json()["username"] == "alice"
    assert client.get(f"{API}/search/by-username", params={"username": "alice"}).json()["code"] == "P1"

    response = client.get(f"{API}/search/by-code", params={"code": "missing"})
    assert response.status_code == 200
    assert response.json() is None


def test_delete_returns_deleted_record(client, db, partner_payload):
    partner_id = client.post(API, json=partner_payload).json()["id"]

    response = client.delete(f"{API}/{partner_id}")
    assert response.status_code == 200
    assert response.json()["id"] == partner_id
    assert db.query(models.Partner).count() == 0
    assert client.get(f"{API}/{partner_id}").status_code == 404
