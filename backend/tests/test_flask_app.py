"""
Tests for the Flask alternative backend.
"""

import io

import pytest

from sensorviz.flask_app import create_app, log_level


HEADER = "timestamp,lat,lon,alt,sats,accX,accY,accZ,gyroX,gyroY,gyroZ,pitch,roll"
CONTENT = f"""{HEADER}
2024-01-01T00:00:00Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2
2024-01-01T00:00:01Z,10.001,20.001,6,9,0.3,0.0,9.9,0.02,0.01,0.00,2,3
"""


@pytest.fixture
def client():
    app = create_app()
    app.testing = True
    return app.test_client()


@pytest.fixture
def client_with_data(client):
    response = client.post(
        "/dataset",
        data={"file": (io.BytesIO(CONTENT.encode()), "walk.csv")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    return client


class TestFlaskApp:
    """Same routes as the FastAPI app."""

    def test_root(self, client):
        assert client.get("/").get_json()["status"] == "running"

    def test_upload(self, client_with_data):
        data = client_with_data.get("/dataset").get_json()

        assert data["filename"] == "walk.csv"
        assert data["sample_count"] == 2

    def test_upload_wrong_extension(self, client):
        response = client.post(
            "/dataset",
            data={"file": (io.BytesIO(CONTENT.encode()), "walk.txt")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert response.get_json()["code"] == "invalid_file_type"

    def test_upload_missing_file(self, client):
        response = client.post("/dataset", data={}, content_type="multipart/form-data")

        assert response.status_code == 400
        assert response.get_json()["code"] == "missing_file"

    def test_selection_round_trip(self, client_with_data):
        response = client_with_data.put("/selection", json={"timestamp": "2024-01-01T00:00:01Z"})

        assert response.get_json()["record"]["sats"] == 9
        assert client_with_data.get("/views/chart").get_json()["selected_index"] == 1

    def test_selection_requires_timestamp(self, client_with_data):
        response = client_with_data.put("/selection", json={})

        assert response.status_code == 400
        assert response.get_json()["code"] == "invalid_request"

    def test_map_click(self, client_with_data):
        response = client_with_data.post("/views/map/markers/1/click")

        assert response.get_json()["timestamp"] == "2024-01-01T00:00:01Z"
        assert client_with_data.post("/views/map/markers/9/click").status_code == 404

    def test_clear_resets_selection(self, client_with_data):
        client_with_data.put("/selection", json={"timestamp": "2024-01-01T00:00:01Z"})

        client_with_data.delete("/dataset")

        assert client_with_data.get("/selection").get_json()["timestamp"] is None
        assert client_with_data.get("/dataset/track").get_json()["bounds"] is None
        assert client_with_data.get("/views/map").get_json()["bounds"] is None

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("SENSORVIZ_LOG_LEVEL", "debug")
        assert log_level() == "DEBUG"

        monkeypatch.delenv("SENSORVIZ_LOG_LEVEL")
        assert log_level() == "INFO"
