# file: backend/openweather.py

import aiohttp
import logging
import random
import ssl
from datetime import datetime
from typing import Any, Dict, Optional

import certifi
import pytz

from backend.aqi import resolve
from backend.config import DEFAULT_LAT, DEFAULT_LOCATION, DEFAULT_LON, OPENWEATHER_API_KEY, OPENWEATHER_URL
from backend.models import CurrentAQI, PollutantReading

PARAM_MAPPING = {
    "pm2_5": "pm25",
    "pm10": "pm10",
    "no2": "no2",
    "so2": "so2",
    "co": "co",
    "o3": "o3"
}

# OpenWeather reports gases in µg/m³; the breakpoint tables use ppb (NO2, SO2, O3) and ppm (CO) at 25 °C
UNIT_SCALE = {
    "no2": 1 / 1.88,
    "so2": 1 / 2.62,
    "o3": 1 / 1.96,
    "co": 0.000873,
}

# Typical Delhi ranges used when no live reading is available
SYNTHETIC_RANGES = {
    "pm25": (60, 110),
    "pm10": (100, 180),
    "no2": (40, 70),
    "so2": (10, 30),
    "co": (5, 10),
    "o3": (30, 70),
}

REQUEST_TIMEOUT = aiohttp.ClientTimeout(total = 10)


def parse_components(payload: Dict[str, Any]) -> Optional[PollutantReading]:
    """Map an OpenWeather air_pollution payload onto our pollutant keys."""
    try:
        components = payload["list"][0]["components"]
    except (KeyError, IndexError, TypeError):
        logging.warning("OpenWeather payload has no components")
        return None

    try:
        readings = {
            key: float(components[param]) * UNIT_SCALE.get(key, 1)
            for param, key in PARAM_MAPPING.items()
            if components.get(param) is not None
        }
        return PollutantReading(**readings) if readings else None
    except (ValueError, TypeError, AttributeError) as e:
        logging.warning(f"OpenWeather payload has invalid components: {e}")
        return None


async def fetch_openweather_components(lat: float = DEFAULT_LAT, lon: float = DEFAULT_LON,
                                       api_key: Optional[str] = OPENWEATHER_API_KEY) -> Optional[PollutantReading]:
    """Fetch the latest pollutant concentrations from OpenWeather; None on any failure."""
    if not api_key:
        logging.info("OPENWEATHER_API_KEY not set, skipping live fetch")
        return None

    ssl_context = ssl.create_default_context(cafile = certifi.where())
    params = {"lat": lat, "lon": lon, "appid": api_key}
    try:
        async with aiohttp.ClientSession(connector = aiohttp.TCPConnector(ssl = ssl_context),
                                         timeout = REQUEST_TIMEOUT) as session:
            async with session.get(OPENWEATHER_URL, params = params) as response:
                if response.status != 200:
                    logging.warning(f"OpenWeather request failed: HTTP {response.status}")
                    return None
                payload = await response.json()
    except Exception as e:
        logging.error(f"Error fetching OpenWeather air pollution data: {e}")
        return None

    return parse_components(payload)


def synthetic_components(rng: Optional[random.Random] = None) -> PollutantReading:
    rng = rng or random.Random()
    return PollutantReading(**{key: rng.randint(low, high - 1) for key, (low, high) in SYNTHETIC_RANGES.items()})


async def get_current_aqi(rng: Optional[random.Random] = None) -> CurrentAQI:
    """City-wide AQI from the live feed, falling back to synthetic concentrations."""
    pollutants = await fetch_openweather_components()
    source = "openweather"
    if pollutants is None:
        logging.info("Using synthetic pollutant concentrations")
        pollutants = synthetic_components(rng)
        source = "synthetic"

    result = resolve(pollutants)
    return CurrentAQI(
        aqi = result.value,
        main_pollutant = result.dominant_pollutant,
        status = result.status,
        color = result.color,
        location = DEFAULT_LOCATION,
        pollutants = pollutants,
        source = source,
        last_updated = datetime.now(pytz.utc),
    )
