# file: tests/test_openweather.py

import asyncio
import json
import random

import pytest

from backend import openweather
from backend.aqi import resolve
from backend.openweather import SYNTHETIC_RANGES, fetch_openweather_components, parse_components, synthetic_components

PAYLOAD = {
    "coord": {"lon": 77.209, "lat": 28.6139},
    "list": [{
        "main": {"aqi": 5},
        "components": {"co": 1201.63, "no": 0.4, "no2": 34.96, "o3": 52.21, "so2": 18.6,
                       "pm2_5": 87.3, "pm10": 141.17, "nh3": 11.02},
        "dt": 1760688000,
    }],
}


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def json(self):
        return json.loads(self.body)


class FakeSession:
    response = None

    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def get(self, url, params = None):
        return self.response


@pytest.fixture
def fake_session(monkeypatch):
    monkeypatch.setattr(openweather.aiohttp, "TCPConnector", lambda **kwargs: None)
    monkeypatch.setattr(openweather.aiohttp, "ClientSession", FakeSession)
    return FakeSession


def components(**values):
    return {"list": [{"components": values}]}


def test_parse_components_maps_and_converts_units():
    readings = parse_components(PAYLOAD)
    assert readings.pm25 == 87.3
    assert readings.pm10 == 141.17
    assert readings.no2 == pytest.approx(34.96 / 1.88)
    assert readings.so2 == pytest.approx(18.6 / 2.62)
    assert readings.o3 == pytest.approx(52.21 / 1.96)
    assert readings.co == pytest.approx(1201.63 * 0.000873)


def test_no2_in_micrograms_is_indexed_as_ppb():
    # 100 µg/m³ is about 53 ppb, the top of the Good band
    result = resolve(parse_components(components(no2 = 100.0)))
    assert result.dominant_pollutant == "NO2"
    assert result.value == 51


@pytest.mark.parametrize("payload", [{}, {"list": []}, {"list": [{}]}, None])
def test_parse_components_handles_malformed_payload(payload):
    assert parse_components(payload) is None


@pytest.mark.parametrize("values", [{"pm2_5": "n/a"}, {"pm2_5": -0.5}, {"pm10": 40.0, "co": [1, 2]}])
def test_parse_components_rejects_invalid_values(values):
    assert parse_components(components(**values)) is None


def test_fetch_without_api_key_returns_none():
    assert asyncio.run(fetch_openweather_components(api_key=None)) is None


def test_fetch_returns_none_on_http_error(fake_session):
    fake_session.response = FakeResponse(401, '{"cod": 401}')
    assert asyncio.run(fetch_openweather_components(api_key="key")) is None


def test_fetch_returns_none_on_invalid_json(fake_session):
    fake_session.response = FakeResponse(200, "<html>gateway timeout</html>")
    assert asyncio.run(fetch_openweather_components(api_key="key")) is None


def test_fetch_parses_successful_response(fake_session):
    fake_session.response = FakeResponse(200, json.dumps(PAYLOAD))
    readings = asyncio.run(fetch_openweather_components(api_key="key"))
    assert readings.pm25 == 87.3


def test_synthetic_components_stay_in_range():
    readings = synthetic_components(random.Random(7)).model_dump()
    for key, (low, high) in SYNTHETIC_RANGES.items():
        assert low <= readings[key] < high
