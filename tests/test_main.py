"""
Tests for the proxy server routes.

Tests cover:
- Health check
- Station list and detail passthrough
- Error responses for missing configuration, WAQI errors and unexpected failures
"""

import pytest
from fastapi.testclient import TestClient

import backend.main as main
from backend import waqi_api
from backend.models import StationDetail, StationSummary
from backend.waqi_api import WaqiApiError


@pytest.fixture
def client():
    return TestClient(main.app, raise_server_exceptions=False)


class TestRoutes:
    """Test suite for the API routes."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "AQI Visualizer Server is running."}

    def test_stations(self, client, monkeypatch):
        seen = {}

        async def fetch_stations(bounds):
            seen["bounds"] = bounds
            return [StationSummary(id=1, lat=19.0, lng=72.8, city="Colaba", aqi=57, color="#eab308")]

        monkeypatch.setattr(main, "fetch_stations", fetch_stations)
        response = client.get("/api/aqi", params={"bounds": "1,2,3,4"})

        assert response.status_code == 200
        assert seen["bounds"] == "1,2,3,4"
        assert response.json() == [
            {"id": 1, "lat": 19.0, "lng": 72.8, "city": "Colaba", "aqi": 57, "color": "#eab308"}
        ]

    def test_stations_without_bounds(self, client, monkeypatch):
        seen = {}

        async def fetch_stations(bounds):
            seen["bounds"] = bounds
            return []

        monkeypatch.setattr(main, "fetch_stations", fetch_stations)
        assert client.get("/api/aqi").json() == []
        assert seen["bounds"] is None

    def test_station_detail(self, client, monkeypatch):
        async def fetch_station_detail(station_id):
            return StationDetail(id=int(station_id), city="Bandra", aqi=None, pm25=None)

        monkeypatch.setattr(main, "fetch_station_detail", fetch_station_detail)
        body = client.get("/api/aqi/8012").json()

        assert body["id"] == 8012
        assert body["aqi"] is None
        assert body["lastUpdated"] is None

    # ==================== Error Scenarios ====================

    def test_missing_api_key(self, client, no_api_key):
        response = client.get("/api/aqi")
        assert response.status_code == 500
        assert "WAQI_API_KEY is not set" in response.json()["error"]

    def test_missing_api_key_detail(self, client, no_api_key):
        response = client.get("/api/aqi/8012")
        assert response.status_code == 500
        assert "WAQI_API_KEY is not set" in response.json()["error"]

    def test_waqi_error(self, client, monkeypatch):
        async def fetch_stations(bounds):
            raise WaqiApiError("Invalid key")

        monkeypatch.setattr(main, "fetch_stations", fetch_stations)
        response = client.get("/api/aqi")

        assert response.status_code == 500
        assert response.json() == {"error": "WAQI API error", "details": "Invalid key"}

    def test_unexpected_error(self, client, monkeypatch):
        async def fetch_station_detail(station_id):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(main, "fetch_station_detail", fetch_station_detail)
        response = client.get("/api/aqi/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Server error", "details": "connection reset"}

    def test_server_error_keeps_cors_header(self, client, monkeypatch, api_key):
        def broken_session():
            raise RuntimeError("connection reset")

        monkeypatch.setattr(waqi_api, "create_session", broken_session)
        response = client.get("/api/aqi/1", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 500
        assert response.json() == {"error": "Server error", "details": "connection reset"}
        assert response.headers["access-control-allow-origin"] == "*"

    def test_waqi_error_keeps_cors_header(self, client, monkeypatch):
        async def fetch_stations(bounds):
            raise WaqiApiError("Invalid key")

        monkeypatch.setattr(main, "fetch_stations", fetch_stations)
        response = client.get("/api/aqi", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "*"
