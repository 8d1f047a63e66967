def test_root_liveness_is_plain_text(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.text == "Backend is working!"


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_security_headers(client):
    res = client.get("/healthz")
    assert res.headers["X-Frame-Options"] == "DENY"
    assert res.headers["X-Content-Type-Options"] == "nosniff"


def test_allowed_origin_gets_cors_header(client):
    res = client.get("/healthz", headers={"Origin": "https://nenethearchitect.com"})
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "https://nenethearchitect.com"


def test_disallowed_origin_is_blocked(client, mailer):
    res = client.post(
        "/experience-inquiry",
        json={"type": "house", "name": "Eve", "email": "eve@example.com", "date": "2026-11-02", "location": "X"},
        headers={"Origin": "https://evil.example.com"},
    )
    assert res.status_code == 403
    assert res.json() == {"error": "Blocked by CORS"}
    assert mailer.calls == 0


def test_preflight_from_allowed_origin(client):
    res = client.options(
        "/create-checkout-session",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_server_to_server_calls_without_origin_pass(client):
    assert client.get("/healthz").status_code == 200


def test_rate_limit_health_when_disabled(client):
    info = client.get("/health/rate-limit").json()
    assert info["enabled"] is False


def test_checkout_rate_limited_with_local_fallback(client, monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    body = {"items": [{"title": "Set", "price": 10}], "customer_email": "buyer@example.com"}
    codes = [client.post("/create-checkout-session", json=body).status_code for _ in range(11)]
    assert codes[:10] == [200] * 10
    assert codes[10] == 429
    assert client.post("/create-checkout-session", json=body).json() == {"error": "Too Many Requests"}


def test_unknown_route_uses_error_shape(client):
    res = client.get("/does-not-exist")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_shape(client):
    res = client.get("/create-checkout-session")
    assert res.status_code == 405
    assert res.json() == {"error": "Method Not Allowed"}
