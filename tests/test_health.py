def test_health_needs_no_token(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "OK", "database": "connected"}


def test_health_reports_database_failure(monkeypatch, client):
    from comicshare.blueprints.health import routes

    def broken():
        raise RuntimeError("connection refused")

    monkeypatch.setattr(routes, "ping", broken)
    resp = client.get("/health")
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["status"] == "ERROR"
    assert body["database"] == "disconnected"
    assert "connection refused" in body["error"]
