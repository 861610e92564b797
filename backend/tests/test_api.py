"""HTTP surface tests."""
import pytest
from fastapi.testclient import TestClient

from sheets.api.deps import sheet_service_dependency
from sheets.main import app


@pytest.fixture
def client(service):
    app.dependency_overrides[sheet_service_dependency] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_upsert_and_read_cells(client):
    response = client.post("/api/v1/s1/A1", json={"value": "5"})
    assert response.status_code == 201
    assert response.json() == {"value": "5", "result": "5"}

    response = client.post("/api/v1/s1/A2", json={"value": "=A1+1"})
    assert response.status_code == 201
    assert response.json() == {"value": "=A1+1", "result": "6"}

    response = client.get("/api/v1/s1/A2")
    assert response.status_code == 200
    assert response.json() == {"value": "=A1+1", "result": "6"}


def test_update_is_visible_on_dependent(client):
    client.post("/api/v1/s1/A1", json={"value": "5"})
    client.post("/api/v1/s1/A2", json={"value": "=A1+1"})

    client.post("/api/v1/s1/A1", json={"value": "10"})

    assert client.get("/api/v1/s1/A2").json() == {"value": "=A1+1", "result": "11"}


def test_get_sheet_hides_links(client):
    client.post("/api/v1/s1/A1", json={"value": "5"})
    client.post("/api/v1/s1/A2", json={"value": "=A1+1"})

    response = client.get("/api/v1/s1")

    assert response.status_code == 200
    assert response.json() == {
        "A1": {"value": "5", "result": "5"},
        "A2": {"value": "=A1+1", "result": "6"},
    }


def test_formula_error_is_422(client):
    response = client.post("/api/v1/s1/A1", json={"value": "=B1+1"})

    assert response.status_code == 422
    assert response.json() == {"value": "=B1+1", "result": "ERROR"}
    assert client.get("/api/v1/s1").status_code == 404


def test_cycle_is_422(client):
    client.post("/api/v1/s1/A2", json={"value": "1"})
    client.post("/api/v1/s1/A1", json={"value": "=A2"})

    response = client.post("/api/v1/s1/A2", json={"value": "=A1"})

    assert response.status_code == 422
    assert response.json()["result"] == "ERROR"
    assert client.get("/api/v1/s1/A2").json() == {"value": "1", "result": "1"}


def test_overly_long_formula_is_422(client):
    client.post("/api/v1/s1/A1", json={"value": "1"})
    formula = "=" + "+".join(["A1"] * 3000)

    response = client.post("/api/v1/s1/B1", json={"value": formula})

    assert response.status_code == 422
    assert response.json() == {"value": formula, "result": "ERROR"}
    assert client.get("/api/v1/s1/B1").status_code == 404


def test_not_found(client):
    assert client.get("/api/v1/missing").status_code == 404
    assert client.get("/api/v1/missing/A1").status_code == 404

    client.post("/api/v1/s1/A1", json={"value": "1"})
    response = client.get("/api/v1/s1/B1")
    assert response.status_code == 404
    assert "B1" in response.json()["detail"]


def test_numeric_body_is_coerced(client):
    response = client.post("/api/v1/s1/A1", json={"value": 7})

    assert response.status_code == 201
    assert response.json() == {"value": "7", "result": "7"}


def test_missing_value_is_rejected(client):
    response = client.post("/api/v1/s1/A1", json={})
    assert response.status_code == 422


def test_path_ids_are_normalized(client):
    client.post("/api/v1/my%20sheet/A1", json={"value": "3"})

    assert client.get("/api/v1/my%20sheet/%20A1%20").json() == {"value": "3", "result": "3"}


def test_path_ids_are_decoded_once(client):
    # %2541 arrives as the literal id "%41", not "A"
    response = client.post("/api/v1/s1/%2541", json={"value": "1"})

    assert response.status_code == 201
    assert list(client.get("/api/v1/s1").json()) == ["%41"]
    assert client.get("/api/v1/s1/A").status_code == 404


def test_blank_path_id_is_rejected(client):
    response = client.post("/api/v1/s1/%20", json={"value": "3"})
    assert response.status_code == 400


def test_list_sheets(client):
    client.post("/api/v1/s1/A1", json={"value": "1"})
    client.post("/api/v1/s2/A1", json={"value": "1"})

    response = client.get("/api/v1/")

    assert response.status_code == 200
    assert sorted(response.json()["sheets"]) == ["s1", "s2"]
