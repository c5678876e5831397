# file: backend/forecast.py
"""
Synthetic AQI history and a short-range forecast built from it.

Randomness comes from an injectable random.Random and time from an injectable
`now`, so both generators are reproducible under a fixed seed and clock.
"""

import random
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Union

import pytz

from backend.models import ForecastPoint, HistoricalPoint
from backend.utils import clamp, get_current_time, localize, round_half_up

HISTORY_HOURS = 168
FORECAST_HOURS = 72

BASE_AQI = 120
HISTORY_AQI_RANGE = (30, 400)
FORECAST_AQI_RANGE = (20, 500)
MOVING_AVERAGE_WINDOW = 5

MAX_FORECAST_CONFIDENCE = 95
MIN_FORECAST_CONFIDENCE = 60
CONFIDENCE_DECAY_PER_HOUR = 0.5

TREND_WINDOW = 6
TREND_THRESHOLD = 10

WINTER_MONTHS = {11, 12, 1, 2, 3}


def is_morning_rush(hour: int) -> bool:
    return 7 <= hour <= 10

def is_evening_rush(hour: int) -> bool:
    return 17 <= hour <= 20

def is_night(hour: int) -> bool:
    return hour >= 22 or hour <= 6


def diurnal_offset(hour: int) -> int:
    """Additive AQI shift for the hour of day in the historical series."""
    if is_morning_rush(hour):
        return 40
    if is_evening_rush(hour):
        return 50
    if is_night(hour):
        return -30
    return 0


def time_factor(hour: int) -> float:
    """Multiplicative AQI factor for the hour of day in the forecast."""
    if is_morning_rush(hour):
        return 1.3
    if is_evening_rush(hour):
        return 1.4
    if is_night(hour):
        return 0.8
    return 1.0


def seasonal_factor(month: int) -> float:
    return 1.5 if month in WINTER_MONTHS else 1.0


def _hourly_timestamps(now: datetime, offsets: Iterable[int]) -> List[datetime]:
    # Step in UTC so DST transitions never repeat or skip an hour
    now_utc = localize(now).astimezone(pytz.utc)
    return [localize(now_utc + timedelta(hours = offset)) for offset in offsets]


def generate_historical(hours_back: int = HISTORY_HOURS, now: Optional[datetime] = None,
                        rng: Optional[random.Random] = None) -> List[HistoricalPoint]:
    """
    Synthesize hours_back + 1 hourly points, oldest first, ending at now.

    AQI follows the rush-hour / night pattern with a weekend dip and uniform noise.
    PM2.5 and PM10 are derived from the AQI; the weather columns are independent draws.
    """
    if hours_back < 0:
        raise ValueError("hours_back must be non-negative")
    now = now or get_current_time()
    rng = rng or random.Random()

    historical = []
    for moment in _hourly_timestamps(now, range(-hours_back, 1)):
        aqi = BASE_AQI + diurnal_offset(moment.hour)
        if moment.weekday() >= 5:
            aqi -= 20
        aqi += (rng.random() - 0.5) * 60
        aqi = clamp(aqi, *HISTORY_AQI_RANGE)

        historical.append(HistoricalPoint(
            timestamp = moment,
            aqi = round_half_up(aqi),
            pm25 = round_half_up(aqi * 0.6 + rng.random() * 20),
            pm10 = round_half_up(aqi * 0.8 + rng.random() * 30),
            temperature = round_half_up(20 + rng.random() * 15),
            humidity = round_half_up(40 + rng.random() * 40),
            wind_speed = round(2 + rng.random() * 8, 1),
        ))
    return historical


def forecast_confidence(offset: int) -> float:
    """Linear decay from 95 at the first forecast hour to a floor of 60."""
    return max(MIN_FORECAST_CONFIDENCE, MAX_FORECAST_CONFIDENCE - CONFIDENCE_DECAY_PER_HOUR * offset)


def weather_factor(offset: int, rng: random.Random) -> str:
    if offset < 24:
        return "High Wind" if rng.random() > 0.7 else "Normal"
    if offset < 48:
        return "Rain Expected" if rng.random() > 0.8 else "Normal"
    return "Stable Conditions" if rng.random() > 0.6 else "Normal"


def main_pollutant(aqi: int, rng: random.Random) -> str:
    if aqi > 200:
        return "PM10"
    if aqi > 150 and rng.random() > 0.5:
        return "NO2"
    return "PM2.5"


def generate_forecast(historical: Sequence[HistoricalPoint], hours_forward: int = FORECAST_HOURS,
                      now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> List[ForecastPoint]:
    """
    Extrapolate hourly AQI for hours_forward hours starting at now + 1h.

    Every point starts from the moving average of the last five observed AQI values
    and is scaled by time-of-day, season and a ±10% random factor.
    """
    if not historical:
        raise ValueError("Forecast needs at least one historical point")
    if hours_forward < 0:
        raise ValueError("hours_forward must be non-negative")
    now = now or get_current_time()
    rng = rng or random.Random()

    recent = [point.aqi for point in historical[-MOVING_AVERAGE_WINDOW:]]
    base = sum(recent) / len(recent)

    forecast = []
    for offset, moment in enumerate(_hourly_timestamps(now, range(1, hours_forward + 1))):
        predicted = base * time_factor(moment.hour) * seasonal_factor(moment.month) * rng.uniform(0.9, 1.1)
        aqi = int(clamp(round_half_up(predicted), *FORECAST_AQI_RANGE))

        forecast.append(ForecastPoint(
            timestamp = moment,
            aqi = aqi,
            weather_factor = weather_factor(offset, rng),
            main_pollutant = main_pollutant(aqi, rng),
            confidence = forecast_confidence(offset),
        ))
    return forecast


def _aqi_of(point: Union[HistoricalPoint, ForecastPoint, dict, float]) -> float:
    if isinstance(point, (int, float)):
        return point
    if isinstance(point, dict):
        return point["aqi"]
    return point.aqi


def classify_trend(series: Sequence) -> str:
    """
    Compare the mean AQI of the last 6 points against the 6 before them.

    A rise of more than 10 is "worsening", a drop of more than 10 is "improving".
    Too little data for either window is "stable".
    """
    if len(series) < 2:
        return "stable"

    values = [_aqi_of(point) for point in series]
    recent = values[-TREND_WINDOW:]
    earlier = values[-2 * TREND_WINDOW:-TREND_WINDOW]
    if not recent or not earlier:
        return "stable"

    difference = sum(recent) / len(recent) - sum(earlier) / len(earlier)
    if difference > TREND_THRESHOLD:
        return "worsening"
    if difference < -TREND_THRESHOLD:
        return "improving"
    return "stable"
