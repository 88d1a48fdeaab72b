from fastapi.testclient import TestClient

from schemagate.main import create_app


def test_health():
    app = create_app()
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.content == b""


def test_health_allows_any_origin():
    client = TestClient(create_app())
    r = client.get("/health", headers={"Origin": "http://dashboard.example.com"})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_unknown_route_is_not_found():
    client = TestClient(create_app())
    assert client.get("/healthz").status_code == 404
