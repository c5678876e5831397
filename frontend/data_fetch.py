#file: frontend/data_fetch.py

import os
import aiohttp
import logging

FASTAPI_URL = os.getenv("FASTAPI_URL", "http://localhost:8000")

async def _get_json(path, params=None, default=None):
    url = f"{FASTAPI_URL}{path}"
    async with aiohttp.ClientSession() as session:
        try:
            async with session.get(url, params=params) as response:
                response.raise_for_status()
                return await response.json()
        except aiohttp.ClientResponseError as e:
            logging.error(f"[ERROR] HTTP {e.status} for {url}: {e.message}")
        except aiohttp.ClientError as e:
            logging.error(f"[ERROR] Network request failed: {e}")
    return default

async def fetch_current_aqi():
    """Fetch the city-wide AQI from FastAPI asynchronously."""
    return await _get_json("/aqi")

async def fetch_hyperlocal_aqi(lat, lon, radius):
    """Fetch the hyperlocal AQI around a point."""
    return await _get_json("/hyperlocal-aqi", params={"lat": lat, "lon": lon, "radius": radius})

async def fetch_sensors():
    """Fetch IoT sensors and the network summary."""
    return await _get_json("/iot-sensors", default={"sensors": [], "network_status": None})

async def fetch_stations():
    """Fetch mock monitoring stations."""
    return await _get_json("/stations", default=[])

async def fetch_forecast(hours_back=168, hours_forward=72):
    """Fetch history, forecast and trend."""
    return await _get_json("/forecast", params={"hours_back": hours_back, "hours_forward": hours_forward})
