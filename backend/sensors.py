# file: backend/sensors.py

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Tuple

import pytz

from backend.models import IoTSensor, NetworkStatus, PollutantReading

SensorFetcher = Callable[[], List[IoTSensor]]

# Static Delhi-NCR deployment: (sensor_id, location, lat, lon, readings, weather, battery, signal, status, calibrated)
MOCK_DEPLOYMENT = [
    ("iot-delhi-001", "Connaught Place", 28.6315, 77.2167,
     dict(pm25=85.2, pm10=142.8, no2=45.6, so2=12.3, co=2.1, o3=38.9),
     dict(temperature=28.5, humidity=65, wind_speed=3.2, wind_direction=180, pressure=1013.2),
     87, 85, "online", "2024-01-15T10:00:00"),
    ("iot-delhi-002", "Karol Bagh", 28.6517, 77.1908,
     dict(pm25=92.4, pm10=156.7, no2=52.1, so2=15.8, co=2.8, o3=42.3),
     dict(temperature=29.1, humidity=68, wind_speed=2.8, wind_direction=165, pressure=1012.8),
     92, 78, "online", "2024-01-10T14:30:00"),
    ("iot-delhi-003", "Lajpat Nagar", 28.5671, 77.2431,
     dict(pm25=78.9, pm10=134.2, no2=38.7, so2=9.6, co=1.9, o3=35.4),
     dict(temperature=27.8, humidity=62, wind_speed=3.5, wind_direction=195, pressure=1013.5),
     95, 92, "online", "2024-01-20T09:15:00"),
    ("iot-gurgaon-001", "Cyber City", 28.4595, 77.0266,
     dict(pm25=88.7, pm10=148.9, no2=48.3, so2=13.2, co=2.4, o3=40.1),
     dict(temperature=29.3, humidity=70, wind_speed=2.9, wind_direction=170, pressure=1012.1),
     78, 88, "online", "2024-01-12T11:45:00"),
    ("iot-noida-001", "Sector 18", 28.5355, 77.3910,
     dict(pm25=91.3, pm10=152.4, no2=50.7, so2=14.6, co=2.6, o3=41.8),
     dict(temperature=28.9, humidity=66, wind_speed=3.1, wind_direction=185, pressure=1012.9),
     83, 81, "online", "2024-01-18T16:20:00"),
    ("iot-delhi-004", "Rohini", 28.7041, 77.1025,
     dict(pm25=95.8, pm10=161.2, no2=55.4, so2=16.9, co=3.1, o3=44.7),
     dict(temperature=30.2, humidity=72, wind_speed=2.6, wind_direction=160, pressure=1011.8),
     45, 65, "offline", "2024-01-05T08:30:00"),
]

CALIBRATION_INTERVAL = timedelta(days=31)


def fetch_mock_sensors(now: Optional[datetime] = None) -> List[IoTSensor]:
    """Build the simulated sensor feed. Offline sensors report their last reading from 30 minutes ago."""
    now = now or datetime.now(pytz.utc)
    sensors = []
    for sensor_id, location, lat, lon, readings, weather, battery, signal, status, calibrated in MOCK_DEPLOYMENT:
        last_calibration = pytz.utc.localize(datetime.fromisoformat(calibrated))
        sensors.append(IoTSensor(
            sensor_id = sensor_id,
            location = location,
            latitude = lat,
            longitude = lon,
            timestamp = now if status == "online" else now - timedelta(minutes = 30),
            readings = PollutantReading(**readings),
            battery_level = battery,
            signal_strength = signal,
            status = status,
            last_calibration = last_calibration,
            next_calibration = last_calibration + CALIBRATION_INTERVAL,
            **weather,
        ))
    return sensors


def summarize_network(sensors: List[IoTSensor], now: Optional[datetime] = None) -> NetworkStatus:
    """Count sensors per status and average their device health."""
    count = len(sensors)
    return NetworkStatus(
        total_sensors = count,
        online_sensors = sum(1 for s in sensors if s.status == "online"),
        offline_sensors = sum(1 for s in sensors if s.status == "offline"),
        maintenance_sensors = sum(1 for s in sensors if s.status == "maintenance"),
        average_battery_level = round(sum(s.battery_level for s in sensors) / count) if count else 0,
        average_signal_strength = round(sum(s.signal_strength for s in sensors) / count) if count else 0,
        last_update = now or datetime.now(pytz.utc),
    )


class SensorRegistry:
    """
    Read-mostly cache of the latest sensor feed.

    A refresh builds a complete new snapshot and swaps the reference in one assignment,
    so readers see either the old set or the new one, never a mix.
    """

    def __init__(self, fetch: SensorFetcher = fetch_mock_sensors):
        self._fetch = fetch
        self._snapshot: Tuple[Dict[str, IoTSensor], Optional[NetworkStatus]] = ({}, None)

    def refresh(self) -> List[IoTSensor]:
        try:
            sensors = self._fetch()
        except Exception as e:
            logging.error(f"Error fetching sensor feed: {e}")
            return list(self._snapshot[0].values())

        self._snapshot = ({sensor.sensor_id: sensor for sensor in sensors}, summarize_network(sensors))
        logging.info(f"Sensor registry refreshed: {len(sensors)} sensors")
        return sensors

    def _current(self) -> Tuple[Dict[str, IoTSensor], Optional[NetworkStatus]]:
        if not self._snapshot[0]:
            self.refresh()
        return self._snapshot

    def all(self, status: Optional[str] = None) -> List[IoTSensor]:
        sensors = list(self._current()[0].values())
        if status:
            sensors = [s for s in sensors if s.status == status]
        return sensors

    def get(self, sensor_id: str) -> Optional[IoTSensor]:
        return self._current()[0].get(sensor_id)

    def network_status(self) -> NetworkStatus:
        network_status = self._current()[1]
        return network_status if network_status is not None else summarize_network([])


registry = SensorRegistry()


def get_registry() -> SensorRegistry:
    return registry
