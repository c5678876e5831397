# file: tests/conftest.py

import random
from datetime import datetime

import pytest
import pytz

from backend.models import IoTSensor, PollutantReading
from backend.sensors import SensorRegistry

KOLKATA = pytz.timezone("Asia/Kolkata")


class FixedRandom(random.Random):
    """random() always returns the same value, so uniform(a, b) lands on a fixed fraction of the range."""

    def __init__(self, value=0.5):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def make_sensor(sensor_id, lat, lon, status="online", **readings):
    now = datetime(2026, 7, 15, 12, tzinfo=pytz.utc)
    return IoTSensor(
        sensor_id=sensor_id,
        location=sensor_id,
        latitude=lat,
        longitude=lon,
        timestamp=now,
        readings=PollutantReading(**readings),
        battery_level=80,
        signal_strength=70,
        status=status,
        last_calibration=now,
        next_calibration=now,
    )


@pytest.fixture
def fixed_now():
    # Wednesday, midday, summer
    return KOLKATA.localize(datetime(2026, 7, 15, 12))


@pytest.fixture
def winter_now():
    return KOLKATA.localize(datetime(2026, 1, 14, 7))


@pytest.fixture
def sensors():
    return [
        make_sensor("cp", 28.6315, 77.2167, pm25=85.2, pm10=142.8, no2=45.6),
        make_sensor("kb", 28.6517, 77.1908, pm25=92.4, pm10=156.7, no2=52.1),
        make_sensor("far", 28.4595, 77.0266, pm25=300.0, pm10=500.0),
        make_sensor("offline", 28.6140, 77.2091, status="offline", pm25=400.0),
    ]


@pytest.fixture
def sensor_registry(sensors):
    registry = SensorRegistry(fetch=lambda: sensors)
    registry.refresh()
    return registry
