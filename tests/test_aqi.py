# file: tests/test_aqi.py

import math

import pytest

from backend.aqi import AQI_BREAKPOINTS, aqi_status, convert, resolve
from backend.models import PollutantReading


def test_pm25_interpolates_inside_band():
    expected = (150 - 101) / (55.4 - 35.5) * (40 - 35.5) + 101
    assert convert("pm25", 40) == pytest.approx(expected)
    assert round(convert("pm25", 40)) == 112


@pytest.mark.parametrize("pollutant", sorted(AQI_BREAKPOINTS))
def test_lowest_band_stays_good(pollutant):
    c_low, c_high, _, _ = AQI_BREAKPOINTS[pollutant][0]
    for fraction in (0, 0.25, 0.5, 0.9):
        assert 0 <= convert(pollutant, c_low + (c_high - c_low) * fraction) <= 50


@pytest.mark.parametrize("pollutant", sorted(AQI_BREAKPOINTS))
def test_above_table_clamps_to_500(pollutant):
    top = AQI_BREAKPOINTS[pollutant][-1][1]
    assert convert(pollutant, top + 0.1) == 500
    assert convert(pollutant, top * 10) == 500


def test_band_edges_hit_index_bounds():
    assert convert("pm10", 155) == 101
    assert convert("co", 50.4) == pytest.approx(500)
    assert convert("o3", 200) == pytest.approx(300)


def test_negative_concentration_counts_as_zero():
    assert convert("no2", -5) == 0


def test_gap_between_bands_uses_upper_band_floor():
    assert convert("pm25", 12.05) == 51


def test_unknown_pollutant_rejected():
    with pytest.raises(ValueError):
        convert("c6h6", 1.0)


@pytest.mark.parametrize("aqi, status", [
    (0, "Good"), (50, "Good"), (51, "Moderate"), (100, "Moderate"),
    (101, "Unhealthy for Sensitive Groups"), (150, "Unhealthy for Sensitive Groups"),
    (151, "Unhealthy"), (200, "Unhealthy"), (201, "Very Unhealthy"), (300, "Very Unhealthy"),
    (301, "Hazardous"), (500, "Hazardous"),
])
def test_status_thresholds(aqi, status):
    assert aqi_status(aqi)[0] == status


def test_resolve_reports_worst_pollutant():
    readings = {"pm25": 20.0, "pm10": 300.0, "no2": 40.0, "so2": 10.0, "co": 1.0, "o3": 30.0}
    result = resolve(readings)

    assert result.value == max(round(convert(p, c)) for p, c in readings.items())
    assert result.dominant_pollutant == "PM10"
    assert result.status == "Unhealthy"
    assert set(result.sub_indices) == {"PM2.5", "PM10", "NO2", "SO2", "CO", "O3"}


def test_resolve_tie_prefers_pm25():
    result = resolve({"pm10": 155, "pm25": 35.5})
    assert result.value == 101
    assert result.dominant_pollutant == "PM2.5"


def test_resolve_tie_follows_priority_order():
    result = resolve({"o3": 55, "so2": 36, "co": 4.5})
    assert result.value == 51
    assert result.dominant_pollutant == "SO2"


def test_resolve_skips_missing_and_invalid_values():
    result = resolve({"pm25": None, "pm10": 100, "no2": math.nan, "so2": "n/a", "benzene": 3})
    assert result.dominant_pollutant == "PM10"
    assert list(result.sub_indices) == ["PM10"]


def test_resolve_accepts_model():
    result = resolve(PollutantReading(pm25=40))
    assert result.value == 112
    assert result.status == "Unhealthy for Sensitive Groups"


def test_resolve_clamps_extreme_values():
    result = resolve({"pm25": 10_000, "o3": 10_000})
    assert result.value == 500
    assert result.status == "Hazardous"
    assert result.dominant_pollutant == "PM2.5"


def test_resolve_without_usable_values_raises():
    with pytest.raises(ValueError):
        resolve({"pm25": None})
    with pytest.raises(ValueError):
        resolve(PollutantReading())
