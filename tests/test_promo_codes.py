from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from app.services.promo_code_service import is_promo_code_valid

API = "/api/v1/promo-codes"
NOW = datetime(2024, 6, 1, 12, 0)


def promo(**overrides):
    fields = dict(is_active=True, expires_at=None, usage_limit=None, usage_count=0)
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.mark.parametrize("promo_code,expected", [
    (None, False),
    (promo(), True),
    (promo(is_active=False), False),
    (promo(expires_at=NOW - timedelta(seconds=1)), False),
    (promo(expires_at=NOW), True),
    (promo(expires_at=NOW + timedelta(days=1)), True),
    (promo(usage_limit=5, usage_count=4), True),
    (promo(usage_limit=5, usage_count=5), False),
    (promo(usage_limit=None, usage_count=1000), True),
])
def test_is_promo_code_valid(promo_code, expected):
    assert is_promo_code_valid(promo_code, now=NOW) is expected


def test_create_and_duplicate(client):
    response = client.post(API, json={"code": "SALE10", "discountPercent": 10})
    assert response.status_code == 201
    assert response.json()["usageCount"] == 0
    assert response.json()["isActive"] is True

    response = client.post(API, json={"code": "SALE10"})
    assert response.status_code == 409
    assert response.json()["field"] == "code"


def test_discount_percent_bounds(client):
    assert client.post(API, json={"code": "X", "discountPercent": 101}).status_code == 400


def test_get_by_code(client):
    client.post(API, json={"code": "SALE10"})
    assert client.get(f"{API}/code/SALE10").json()["code"] == "SALE10"
    assert client.get(f"{API}/code/NOPE").status_code == 404


def test_validate(client):
    client.post(API, json={"code": "ACTIVE"})
    client.post(API, json={"code": "OFF", "isActive": False})
    client.post(API, json={"code": "OLD", "expiresAt": "2020-01-01T00:00:00.000Z"})

    assert client.post(f"{API}/validate/ACTIVE").json() == {"isValid": True}
    assert client.post(f"{API}/validate/OFF").json() == {"isValid": False}
    assert client.post(f"{API}/validate/OLD").json() == {"isValid": False}
    assert client.post(f"{API}/validate/MISSING").json() == {"isValid": False}


def test_list_is_active_filter(client):
    client.post(API, json={"code": "ON"})
    client.post(API, json={"code": "OFF", "isActive": False})

    assert client.get(API).json()["total"] == 2
    assert [p["code"] for p in client.get(API, params={"isActive": "false"}).json()["data"]] == ["OFF"]
    assert [p["code"] for p in client.get(API, params={"isActive": "true"}).json()["data"]] == ["ON"]


def test_update_and_delete(client):
    promo_id = client.post(API, json={"code": "SALE"}).json()["id"]
    client.post(API, json={"code": "OTHER"})

    assert client.patch(f"{API}/{promo_id}", json={"code": "OTHER"}).status_code == 409
    assert client.patch(f"{API}/{promo_id}", json={"isActive": False}).json()["isActive"] is False

    response = client.delete(f"{API}/{promo_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Promo code deleted successfully"}
