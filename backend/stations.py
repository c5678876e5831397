# file: backend/stations.py

import random
from typing import List, Optional

from backend.aqi import aqi_status
from backend.models import Station

MONITORING_STATIONS = [
    ("Anand Vihar", 28.6469, 77.3152),
    ("Punjabi Bagh", 28.6742, 77.1347),
    ("R K Puram", 28.5631, 77.1822),
    ("ITO", 28.6289, 77.2497),
    ("Dwarka", 28.5921, 77.046),
    ("Rohini", 28.7041, 77.1025),
    ("Shadipur", 28.6517, 77.1583),
    ("Mandir Marg", 28.6358, 77.2014),
    ("Lodhi Road", 28.5918, 77.2273),
    ("Najafgarh", 28.6089, 76.9794),
]


def get_stations(rng: Optional[random.Random] = None) -> List[Station]:
    """Mock monitoring stations with a random AQI in the 80-279 range typical for Delhi."""
    rng = rng or random.Random()
    stations = []
    for index, (name, lat, lon) in enumerate(MONITORING_STATIONS):
        aqi = rng.randint(80, 279)
        status, color = aqi_status(aqi)
        stations.append(Station(id = f"station-{index}", name = name, latitude = lat, longitude = lon,
                                aqi = aqi, status = status, color = color))
    return stations
