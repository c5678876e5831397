# file: tests/test_api.py

import pytest
from fastapi.testclient import TestClient

import backend.openweather as openweather
from backend.main import app
from backend.models import PollutantReading
from backend.sensors import get_registry


@pytest.fixture
def client(sensor_registry):
    app.dependency_overrides[get_registry] = lambda: sensor_registry
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def no_live_feed(monkeypatch):
    async def fetch(*args, **kwargs):
        return None
    monkeypatch.setattr(openweather, "fetch_openweather_components", fetch)


def test_current_aqi_falls_back_to_synthetic(client, no_live_feed):
    response = client.get("/aqi")
    assert response.status_code == 200

    data = response.json()
    assert data["source"] == "synthetic"
    assert 0 <= data["aqi"] <= 500
    assert 60 <= data["pollutants"]["pm25"] < 110


def test_current_aqi_uses_live_reading(client, monkeypatch):
    async def fetch(*args, **kwargs):
        return PollutantReading(pm25=40, pm10=20)
    monkeypatch.setattr(openweather, "fetch_openweather_components", fetch)

    data = client.get("/aqi").json()
    assert data["source"] == "openweather"
    assert data["aqi"] == 112
    assert data["main_pollutant"] == "PM2.5"
    assert data["status"] == "Unhealthy for Sensitive Groups"


def test_calculate_aqi(client):
    response = client.post("/aqi/calculate", json={"pm25": 35.5, "pm10": 155})
    assert response.status_code == 200
    assert response.json()["value"] == 101
    assert response.json()["dominant_pollutant"] == "PM2.5"


def test_calculate_aqi_rejects_empty_and_negative(client):
    assert client.post("/aqi/calculate", json={}).status_code == 422
    assert client.post("/aqi/calculate", json={"pm25": -1}).status_code == 422


def test_hyperlocal_defaults_to_city_centre(client):
    data = client.get("/hyperlocal-aqi").json()
    assert data["sensor_count"] == 2
    assert data["confidence"] == 80
    assert data["no_data"] is False
    assert data["latitude"] == pytest.approx(28.6139)


def test_hyperlocal_no_sensors_in_radius(client):
    data = client.get("/hyperlocal-aqi", params={"lat": 19.076, "lon": 72.8777, "radius": 5}).json()
    assert data["no_data"] is True
    assert data["confidence"] == 0


def test_hyperlocal_validates_radius(client):
    assert client.get("/hyperlocal-aqi", params={"radius": 0}).status_code == 422
    assert client.get("/hyperlocal-aqi", params={"lat": 120}).status_code == 422


def test_iot_sensors(client):
    data = client.get("/iot-sensors").json()
    assert len(data["sensors"]) == 4
    assert data["network_status"]["online_sensors"] == 3
    assert data["network_status"]["offline_sensors"] == 1

    online = client.get("/iot-sensors", params={"status": "online"}).json()
    assert {s["status"] for s in online["sensors"]} == {"online"}
    assert client.get("/iot-sensors", params={"status": "broken"}).status_code == 422


def test_iot_sensor_lookup(client):
    assert client.get("/iot-sensors/cp").json()["readings"]["pm25"] == 85.2
    assert client.get("/iot-sensors/missing").status_code == 404


def test_stations(client):
    stations = client.get("/stations").json()
    assert len(stations) == 10
    for station in stations:
        assert 80 <= station["aqi"] <= 279
        assert station["status"] in {"Moderate", "Unhealthy for Sensitive Groups", "Unhealthy", "Very Unhealthy"}


def test_forecast(client):
    data = client.get("/forecast", params={"hours_back": 24, "hours_forward": 12}).json()
    assert len(data["historical"]) == 25
    assert len(data["forecast"]) == 12
    assert data["trend"] in {"improving", "worsening", "stable"}
    assert data["forecast"][0]["confidence"] == 95


def test_forecast_limits(client):
    assert client.get("/forecast", params={"hours_forward": 73}).status_code == 422
    assert client.get("/forecast", params={"hours_back": 0}).status_code == 422
