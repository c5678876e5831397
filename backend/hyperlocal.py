# file: backend/hyperlocal.py

import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import pytz

from backend.aqi import POLLUTANT_PRIORITY, resolve
from backend.models import HyperlocalResult, IoTSensor, PollutantReading

EARTH_RADIUS_KM = 6371
MAX_CONFIDENCE = 95

# (lat_min, lat_max, lon_min, lon_max, name)
LOCATION_BOXES = [
    (28.6, 28.7, 77.2, 77.3, "Central Delhi"),
    (28.4, 28.5, 77.0, 77.1, "Gurgaon"),
    (28.5, 28.6, 77.3, 77.4, "Noida"),
]
REGION_NAME = "Delhi-NCR"

BAND_RECOMMENDATIONS = [
    (50, ["Excellent air quality - perfect for outdoor activities"]),
    (100, ["Good air quality - suitable for most outdoor activities"]),
    (150, ["Moderate air quality - sensitive individuals should limit outdoor activities",
           "Consider wearing a mask if you have respiratory conditions"]),
    (200, ["Unhealthy air quality - limit outdoor activities",
           "Wear N95 masks when going outside",
           "Keep windows closed and use air purifiers"]),
]
SEVERE_RECOMMENDATIONS = ["Very unhealthy air quality - avoid outdoor activities",
                          "Stay indoors with air purifiers running",
                          "Wear N95 masks if you must go outside"]

POLLUTANT_RECOMMENDATIONS = {
    "PM2.5": "PM2.5 is the primary concern - these particles can penetrate deep into lungs",
    "PM10": "PM10 particles are larger but can still cause respiratory issues",
    "NO2": "High NO2 levels - avoid areas with heavy traffic",
    "SO2": "Elevated SO2 - stay away from industrial areas and coal burning",
    "CO": "High CO levels - avoid congested roads and ventilate enclosed spaces",
    "O3": "Ozone peaks in the afternoon - schedule outdoor activities for the morning",
}

NO_DATA_MESSAGE = "No sensor data available for this location"


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def location_name(lat: float, lon: float) -> str:
    for lat_min, lat_max, lon_min, lon_max, name in LOCATION_BOXES:
        if lat_min < lat < lat_max and lon_min < lon < lon_max:
            return name
    return REGION_NAME


def confidence_for(sensor_count: int) -> int:
    """More corroborating sensors raise confidence, saturating at 95."""
    if sensor_count <= 0:
        return 0
    return min(MAX_CONFIDENCE, 60 + 10 * sensor_count)


def recommendations_for(aqi: float, pollutant: Optional[str]) -> List[str]:
    recommendations = next(
        (list(advice) for upper, advice in BAND_RECOMMENDATIONS if aqi <= upper),
        list(SEVERE_RECOMMENDATIONS),
    )
    if pollutant in POLLUTANT_RECOMMENDATIONS:
        recommendations.append(POLLUTANT_RECOMMENDATIONS[pollutant])
    return recommendations


def sensors_in_range(center: Tuple[float, float], radius_km: float,
                     sensors: Iterable[IoTSensor]) -> List[IoTSensor]:
    """Online sensors within radius_km of center."""
    lat, lon = center
    return [
        sensor for sensor in sensors
        if sensor.status == "online"
        and haversine_km(lat, lon, sensor.latitude, sensor.longitude) <= radius_km
    ]


def average_readings(sensors: List[IoTSensor]) -> PollutantReading:
    """Mean concentration per pollutant over the sensors that report it."""
    averages: Dict[str, float] = {}
    for pollutant in POLLUTANT_PRIORITY:
        values = [getattr(s.readings, pollutant) for s in sensors if getattr(s.readings, pollutant) is not None]
        if values:
            averages[pollutant] = sum(values) / len(values)
    return PollutantReading(**averages)


def aggregate(center: Tuple[float, float], radius_km: float, sensors: Iterable[IoTSensor],
              now: Optional[datetime] = None) -> HyperlocalResult:
    """
    Hyperlocal AQI around a point from the online sensors within radius_km.

    With no sensor in range, or only sensors reporting no pollutant, the result carries
    no_data=True and zero confidence; its aqi of 0 is not a reading.
    """
    lat, lon = center
    now = now or datetime.now(pytz.utc)
    nearby = sensors_in_range(center, radius_km, sensors)
    averages = average_readings(nearby)

    if not nearby or not averages.model_dump(exclude_none = True):
        return HyperlocalResult(
            location = "Sensors report no pollutant data" if nearby else "No sensors nearby",
            latitude = lat,
            longitude = lon,
            radius_km = radius_km,
            aqi = 0,
            confidence = 0,
            sensor_count = len(nearby),
            no_data = True,
            recommendations = [NO_DATA_MESSAGE],
            last_updated = now,
        )

    result = resolve(averages)
    return HyperlocalResult(
        location = location_name(lat, lon),
        latitude = lat,
        longitude = lon,
        radius_km = radius_km,
        aqi = result.value,
        dominant_pollutant = result.dominant_pollutant,
        status = result.status,
        confidence = confidence_for(len(nearby)),
        sensor_count = len(nearby),
        averages = averages,
        recommendations = recommendations_for(result.value, result.dominant_pollutant),
        last_updated = now,
    )
