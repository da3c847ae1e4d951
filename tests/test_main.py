from app.core.monitoring import metrics


def duration_keys():
    return {key for key in metrics.metrics if key.startswith("http.request.duration")}


def test_read_main(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "MTrade API"

def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"

def test_request_id_is_echoed(client):
    response = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"

def test_request_id_is_generated(client):
    assert client.get("/").headers["X-Request-ID"]

def test_duration_metrics_are_keyed_by_route(client):
    before = duration_keys()
    for i in range(20):
        client.get(f"/api/v1/visitors/id-{i}")
        client.get(f"/api/v1/payments/by-email/user{i}@example.com")

    added = duration_keys() - before
    assert len(added) <= 2
    assert any("GET /api/v1/visitors/{visitor_id}" in key for key in duration_keys())
    assert not any("id-7" in key for key in duration_keys())

def test_unknown_resource_is_404(client):
    response = client.get("/api/v1/partners/999")
    assert response.status_code == 404
    body = response.json()
    assert body["statusCode"] == 404
    assert body["error"] == "Not Found"
    assert "999" in body["message"]


def test_timing_decorator_records_sync_duration():
    @metrics.timing("tests.sum")
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add.__name__ == "add"
    assert "tests.sum.duration" in metrics.metrics
