from sqlalchemy.exc import OperationalError

from app import models
from app.core.monitoring import metrics
from app.services.promo_code_service import PromoCodeService

API = "/api/v1/payments"


def create_promo(client, **fields):
    return client.post("/api/v1/promo-codes", json={"code": "SALE", **fields}).json()


def test_create_payment_without_promo(client, payment_payload):
    response = client.post(API, json=payment_payload)
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PENDING"
    assert body["promoCode"] is None


def test_amount_must_be_positive(client, payment_payload):
    assert client.post(API, json={**payment_payload, "amount": 0}).status_code == 400


def test_promo_code_is_redeemed(client, db, payment_payload):
    promo = create_promo(client, discountPercent=15, usageLimit=2)

    response = client.post(API, json={**payment_payload, "promoCodeId": promo["id"]})
    assert response.status_code == 201
    assert response.json()["promoCode"] == {
        "id": promo["id"], "code": "SALE", "discountPercent": 15, "discountAmount": None
    }
    assert db.get(models.PromoCode, promo["id"]).usage_count == 1


def test_expired_promo_code_rejects_payment(client, db, payment_payload):
    promo = create_promo(client, expiresAt="2020-01-01T00:00:00.000Z")

    response = client.post(API, json={**payment_payload, "promoCodeId": promo["id"]})
    assert response.status_code == 400
    assert response.json()["error"] == "Bad Request"
    assert db.query(models.Payment).count() == 0
    assert db.get(models.PromoCode, promo["id"]).usage_count == 0


def test_exhausted_promo_code_rejects_payment(client, payment_payload):
    promo = create_promo(client, usageLimit=1)
    assert client.post(API, json={**payment_payload, "promoCodeId": promo["id"]}).status_code == 201
    assert client.post(API, json={**payment_payload, "promoCodeId": promo["id"]}).status_code == 400


def test_unknown_promo_code(client, payment_payload):
    assert client.post(API, json={**payment_payload, "promoCodeId": 404}).status_code == 404


def test_failed_usage_increment_is_reported(client, db, payment_payload, monkeypatch):
    promo = create_promo(client)
    reported = metrics.get("data.inconsistency", tags={"kind": "promo_usage_increment"})

    def broken_increment(self, promo_code_id):
        raise OperationalError("UPDATE", {}, Exception("lock timeout"))

    monkeypatch.setattr(PromoCodeService, "increment_usage", broken_increment)

    response = client.post(API, json={**payment_payload, "promoCodeId": promo["id"]})
    assert response.status_code == 201
    assert db.query(models.Payment).count() == 1
    assert metrics.get("data.inconsistency", tags={"kind": "promo_usage_increment"}) == reported + 1


def test_update_validates_new_promo_code(client, db, payment_payload):
    payment_id = client.post(API, json=payment_payload).json()["id"]
    expired = create_promo(client, expiresAt="2020-01-01T00:00:00.000Z")

    response = client.patch(f"{API}/{payment_id}", json={"promoCodeId": expired["id"]})
    assert response.status_code == 400

    response = client.patch(f"{API}/{payment_id}", json={"status": "COMPLETED"})
    assert response.status_code == 200
    assert response.json()["status"] == "COMPLETED"


def test_list_and_by_email(client, payment_payload):
    client.post(API, json={**payment_payload, "email": "anna@example.com", "product": "Course"})
    client.post(API, json={**payment_payload, "email": "boris@example.com", "product": "Mentoring"})
    client.post(API, json={**payment_payload, "email": "boris@example.com", "status": "COMPLETED"})

    assert client.get(API, params={"search": "mentor"}).json()["total"] == 1
    assert client.get(API, params={"status": "COMPLETED"}).json()["total"] == 1

    body = client.get(f"{API}/by-email/boris@example.com").json()
    assert body["total"] == 2
    assert {p["email"] for p in body["data"]} == {"boris@example.com"}


def test_stats(client, payment_payload):
    client.post(API, json={**payment_payload, "amount": 100})
    client.post(API, json={**payment_payload, "amount": 250, "status": "COMPLETED"})
    client.post(API, json={**payment_payload, "amount": 750, "status": "COMPLETED"})

    assert client.get(f"{API}/stats").json() == {"pending": 1, "completed": 2, "totalAmount": 1000}
    assert client.get(f"{API}/stats", params={"dateTo": "2000-01-01T00:00:00.000Z"}).json() == {
        "pending": 0, "completed": 0, "totalAmount": 0
    }


def test_delete_payment(client, payment_payload):
    payment_id = client.post(API, json=payment_payload).json()["id"]
    response = client.delete(f"{API}/{payment_id}")
    assert response.json() == {"message": "Payment deleted successfully"}
    assert client.get(f"{API}/{payment_id}").status_code == 404


def test_increment_failure_on_unusable_session_still_returns_payment(client, db, payment_payload, monkeypatch):
    promo = create_promo(client, discountPercent=5)
    reported = metrics.get("data.inconsistency", tags={"kind": "promo_usage_increment"})

    def increment_on_dead_session(self, promo_code_id):
        # Loaded state is stale and the session can no longer load anything
        self.db.expire_all()
        self.db.close()
        raise OperationalError("UPDATE", {}, Exception("server closed the connection"))

    monkeypatch.setattr(PromoCodeService, "increment_usage", increment_on_dead_session)

    response = client.post(API, json={**payment_payload, "promoCodeId": promo["id"]})
    assert response.status_code == 201
    body = response.json()
    assert body["promoCode"]["code"] == "SALE"
    assert db.query(models.Payment).one().id == body["id"]
    assert metrics.get("data.inconsistency", tags={"kind": "promo_usage_increment"}) == reported + 1
