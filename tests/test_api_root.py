from fastapi.testclient import TestClient

from apps.api.main import app


def test_root() -> None:
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200
    payload = response.json()
    assert payload["name"] == "dentchart"
    assert payload["status"] == "ok"
    assert "/v1/chart" in payload["endpoints"]
    assert "/v1/notation/{tooth_number}" in payload["endpoints"]
