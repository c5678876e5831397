#file: backend/aqi.py
"""US EPA style AQI: per-pollutant breakpoint interpolation and the overall (worst) index."""

import math
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel

from backend.models import AQIResult
from backend.utils import clamp, round_half_up

MAX_AQI = 500

# (c_low, c_high, i_low, i_high)
AQI_BREAKPOINTS = {
    "pm25": [(0.0, 12.0, 0, 50), (12.1, 35.4, 51, 100), (35.5, 55.4, 101, 150),
             (55.5, 150.4, 151, 200), (150.5, 250.4, 201, 300), (250.5, 500.4, 301, 500)],
    "pm10": [(0, 54, 0, 50), (55, 154, 51, 100), (155, 254, 101, 150),
             (255, 354, 151, 200), (355, 424, 201, 300), (425, 604, 301, 500)],
    "no2": [(0, 53, 0, 50), (54, 100, 51, 100), (101, 360, 101, 150),
            (361, 649, 151, 200), (650, 1249, 201, 300), (1250, 2049, 301, 500)],
    "so2": [(0, 35, 0, 50), (36, 75, 51, 100), (76, 185, 101, 150),
            (186, 304, 151, 200), (305, 604, 201, 300), (605, 1004, 301, 500)],
    "co": [(0.0, 4.4, 0, 50), (4.5, 9.4, 51, 100), (9.5, 12.4, 101, 150),
           (12.5, 15.4, 151, 200), (15.5, 30.4, 201, 300), (30.5, 50.4, 301, 500)],
    # 8-hour ozone has no band above 300; anything past 200 ppb clamps to 500
    "o3": [(0, 54, 0, 50), (55, 70, 51, 100), (71, 85, 101, 150),
           (86, 105, 151, 200), (106, 200, 201, 300)],
}

# Tie-break order, most health-critical first
POLLUTANT_PRIORITY = ["pm25", "pm10", "no2", "so2", "co", "o3"]

POLLUTANT_LABELS = {
    "pm25": "PM2.5",
    "pm10": "PM10",
    "no2": "NO2",
    "so2": "SO2",
    "co": "CO",
    "o3": "O3",
}

AQI_STATUS_LEVELS = [
    (50, "Good", "#2ecc71"),
    (100, "Moderate", "#f1c40f"),
    (150, "Unhealthy for Sensitive Groups", "#e67e22"),
    (200, "Unhealthy", "#e74c3c"),
    (300, "Very Unhealthy", "#8e44ad"),
]
HAZARDOUS = ("Hazardous", "#7f0000")


def convert(pollutant: str, concentration: float) -> float:
    """
    Convert a pollutant concentration to its AQI sub-index via piecewise linear interpolation.

    Negative concentrations count as 0. A concentration sitting in the rounding gap
    between two published bands (e.g. PM2.5 12.05) takes the upper band's lower edge.
    Anything above the last band is reported as the maximum index.
    """
    if pollutant not in AQI_BREAKPOINTS:
        raise ValueError(f"Unknown pollutant: {pollutant}")

    c = max(0.0, float(concentration))
    for c_low, c_high, i_low, i_high in AQI_BREAKPOINTS[pollutant]:
        if c <= c_high:
            c = max(c, c_low)
            return (i_high - i_low) / (c_high - c_low) * (c - c_low) + i_low
    return float(MAX_AQI)


def aqi_status(aqi: float) -> Tuple[str, str]:
    """Return the (status label, colour) pair for an AQI value."""
    for upper, label, color in AQI_STATUS_LEVELS:
        if aqi <= upper:
            return label, color
    return HAZARDOUS


def _valid_concentration(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


def resolve(readings: Union[Mapping[str, Any], BaseModel]) -> AQIResult:
    """
    Compute the overall AQI for a set of pollutant concentrations.

    Pollutants that are missing or not numeric are left out of the max rather than
    counted as zero. Raises ValueError when nothing usable is left.
    """
    if isinstance(readings, BaseModel):
        readings = readings.model_dump()

    sub_indices: Dict[str, int] = {}
    for pollutant in POLLUTANT_PRIORITY:
        concentration = _valid_concentration(readings.get(pollutant))
        if concentration is None:
            continue
        sub_index = clamp(convert(pollutant, concentration), 0, MAX_AQI)
        sub_indices[pollutant] = round_half_up(sub_index)

    if not sub_indices:
        raise ValueError("No valid pollutant concentrations to compute AQI from")

    value = max(sub_indices.values())
    # dict preserves priority order, so the first match wins ties
    dominant = next(p for p, idx in sub_indices.items() if idx == value)
    status, color = aqi_status(value)

    return AQIResult(
        value = value,
        dominant_pollutant = POLLUTANT_LABELS[dominant],
        status = status,
        color = color,
        sub_indices = {POLLUTANT_LABELS[p]: idx for p, idx in sub_indices.items()},
    )
