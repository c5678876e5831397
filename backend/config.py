# file: backend/config.py

import os
from dotenv import load_dotenv

load_dotenv()

# Delhi city centre
DEFAULT_LAT = float(os.getenv("DEFAULT_LAT", "28.6139"))
DEFAULT_LON = float(os.getenv("DEFAULT_LON", "77.209"))
DEFAULT_RADIUS_KM = float(os.getenv("DEFAULT_RADIUS_KM", "5"))
DEFAULT_LOCATION = os.getenv("DEFAULT_LOCATION", "Delhi")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")

OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY")
OPENWEATHER_URL = os.getenv("OPENWEATHER_URL", "https://api.openweathermap.org/data/2.5/air_pollution")

SENSOR_REFRESH_MINUTES = int(os.getenv("SENSOR_REFRESH_MINUTES", "15"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Validate environment variables
if not -90 <= DEFAULT_LAT <= 90 or not -180 <= DEFAULT_LON <= 180 :
    raise ValueError("DEFAULT_LAT/DEFAULT_LON out of range")
if DEFAULT_RADIUS_KM <= 0 or SENSOR_REFRESH_MINUTES <= 0 :
    raise ValueError("DEFAULT_RADIUS_KM and SENSOR_REFRESH_MINUTES must be positive")
