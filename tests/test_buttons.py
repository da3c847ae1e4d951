import warnings
from datetime import datetime

from app import models
from app.schemas.button import ButtonCreate

API = "/api/v1/buttons"


def add_button(db, name, created_at, type_="cta", click_count=0):
    db.add(models.Button(
        name=name,
        type=type_,
        click_count=click_count,
        created_at=created_at,
        updated_at=created_at,
    ))
    db.commit()


def test_create_button(client):
    response = client.post(API, json={"name": "Buy", "type": "cta", "url": "https://mtrade.ru/buy"})
    assert response.status_code == 201
    body = response.json()
    assert body["clickCount"] == 0
    assert body["url"] == "https://mtrade.ru/buy"


def test_invalid_url_is_rejected(client):
    assert client.post(API, json={"name": "Buy", "type": "cta", "url": "not a url"}).status_code == 400


def test_date_range_filter_newest_first(client, db):
    add_button(db, "before", datetime(2023, 12, 31, 23, 59, 59))
    add_button(db, "start", datetime(2024, 1, 1, 0, 0, 0))
    add_button(db, "middle", datetime(2024, 6, 15))
    add_button(db, "end", datetime(2024, 12, 31, 23, 59, 59, 999000))
    add_button(db, "after", datetime(2025, 1, 1))

    response = client.get(API, params={
        "dateFrom": "2024-01-01T00:00:00.000Z",
        "dateTo": "2024-12-31T23:59:59.999Z",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert [b["name"] for b in body["data"]] == ["end", "middle", "start"]


def test_click_increments(client):
    button_id = client.post(API, json={"name": "Buy", "type": "cta"}).json()["id"]

    client.post(f"{API}/{button_id}/click")
    response = client.post(f"{API}/{button_id}/click")
    assert response.status_code == 200
    assert response.json()["clickCount"] == 2
    assert client.post(f"{API}/999/click").status_code == 404


def test_track_click_creates_then_increments(client, db):
    response = client.post(f"{API}/track-click", json={"name": "hero", "type": "banner"})
    assert response.status_code == 200
    assert response.json()["clickCount"] == 1
    assert response.json()["type"] == "banner"

    response = client.post(f"{API}/track-click", json={"name": "hero"})
    assert response.json()["clickCount"] == 2
    assert db.query(models.Button).count() == 1


def test_track_click_defaults(client):
    response = client.post(f"{API}/track-click", json={"name": "footer"})
    body = response.json()
    assert body["type"] == "action"
    assert body["description"] == "Auto-created button from frontend tracking"
    assert body["isActive"] is True


def test_click_stats(client, db):
    add_button(db, "a", datetime(2024, 3, 1), type_="cta", click_count=3)
    add_button(db, "b", datetime(2024, 3, 2), type_="cta", click_count=4)
    add_button(db, "c", datetime(2024, 3, 3), type_="link", click_count=1)
    add_button(db, "d", datetime(2020, 1, 1), type_="link", click_count=50)

    response = client.get(f"{API}/stats/clicks", params={"dateFrom": "2024-01-01T00:00:00.000Z"})
    stats = {s["type"]: s for s in response.json()}
    assert stats["cta"] == {"type": "cta", "totalClicks": 7, "buttonCount": 2}
    assert stats["link"] == {"type": "link", "totalClicks": 1, "buttonCount": 1}


def test_update_and_delete(client):
    button_id = client.post(API, json={"name": "Buy", "type": "cta"}).json()["id"]

    assert client.patch(f"{API}/{button_id}", json={"isActive": False}).json()["isActive"] is False

    response = client.delete(f"{API}/{button_id}")
    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"{API}/{button_id}").status_code == 404


def test_url_is_plain_text_after_validation():
    button_in = ButtonCreate(name="Buy", type="cta", url="https://mtrade.ru/buy")
    assert isinstance(button_in.url, str)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert button_in.model_dump()["url"] == "https://mtrade.ru/buy"
