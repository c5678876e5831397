# file : /backend/main.py

import logging
import uvicorn
from fastapi import Depends, FastAPI, Query, HTTPException
from contextlib import asynccontextmanager
from typing import List, Optional

from backend.aqi import resolve
from backend.config import DEFAULT_LAT, DEFAULT_LON, DEFAULT_RADIUS_KM, LOG_LEVEL
from backend.forecast import FORECAST_HOURS, HISTORY_HOURS, classify_trend, generate_forecast, generate_historical
from backend.hyperlocal import aggregate
from backend.models import (AQIResult, CurrentAQI, ForecastResponse, HyperlocalResult, IoTSensor, PollutantReading,
                            SensorsResponse, Station)
from backend.openweather import get_current_aqi
from backend.scheduler import run_schedule
from backend.sensors import SensorRegistry, get_registry, registry
from backend.stations import get_stations
from backend.utils import get_current_time

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')

# Hours of history and forecast fed to the trend classifier
TREND_CONTEXT_HOURS = 12

@asynccontextmanager
async def lifespan(app: FastAPI) :
    """Load the sensor registry and start its refresh scheduler on startup."""
    registry.refresh()
    run_schedule(registry)
    yield


app = FastAPI(
    title = "Air Quality Monitoring - Delhi-NCR",
    description = "AQI, hyperlocal sensor aggregation and 72h forecast for Delhi-NCR.",
    version = "0.2",
    lifespan = lifespan
)


@app.get("/aqi", response_model=CurrentAQI)
async def current_aqi():
    """City-wide AQI from OpenWeather, or synthetic concentrations when it is unavailable."""
    return await get_current_aqi()

@app.post("/aqi/calculate", response_model=AQIResult)
async def calculate_aqi(readings: PollutantReading):
    """Compute the overall AQI and dominant pollutant for the posted concentrations."""
    try:
        return resolve(readings)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

@app.get("/hyperlocal-aqi", response_model=HyperlocalResult)
async def hyperlocal_aqi(
    lat: float = Query(DEFAULT_LAT, ge=-90, le=90, description="Latitude of the query point"),
    lon: float = Query(DEFAULT_LON, ge=-180, le=180, description="Longitude of the query point"),
    radius: float = Query(DEFAULT_RADIUS_KM, gt=0, description="Search radius in km"),
    sensors: SensorRegistry = Depends(get_registry)
):
    """AQI averaged over online sensors within the radius; check confidence before trusting it."""
    logging.info(f"Hyperlocal AQI for ({lat}, {lon}) within {radius} km")
    return aggregate((lat, lon), radius, sensors.all())

@app.get("/iot-sensors", response_model=SensorsResponse)
async def iot_sensors(
    status: Optional[str] = Query(None, pattern="^(online|offline|maintenance)$", description="Filter by sensor status"),
    sensors: SensorRegistry = Depends(get_registry)
):
    """All sensors in the registry with the network summary."""
    return SensorsResponse(sensors=sensors.all(status), network_status=sensors.network_status())

@app.get("/iot-sensors/{sensor_id}", response_model=IoTSensor)
async def iot_sensor(sensor_id: str, sensors: SensorRegistry = Depends(get_registry)):
    sensor = sensors.get(sensor_id)
    if sensor is None:
        raise HTTPException(status_code=404, detail=f"Sensor {sensor_id} not found")
    return sensor

@app.get("/stations", response_model=List[Station])
async def stations():
    """Mock monitoring stations with their current AQI."""
    return get_stations()

@app.get("/forecast", response_model=ForecastResponse)
async def forecast(
    hours_back: int = Query(HISTORY_HOURS, ge=1, le=HISTORY_HOURS, description="Hours of history to generate"),
    hours_forward: int = Query(FORECAST_HOURS, ge=1, le=FORECAST_HOURS, description="Hours to forecast")
):
    """Synthetic history, the forecast extrapolated from it and the AQI trend around now."""
    now = get_current_time()
    historical = generate_historical(hours_back, now=now)
    predicted = generate_forecast(historical, hours_forward, now=now)
    trend = classify_trend(historical[-TREND_CONTEXT_HOURS:] + predicted[:TREND_CONTEXT_HOURS])
    return ForecastResponse(historical=historical, forecast=predicted, trend=trend, generated_at=now)

if __name__ == "__main__" :
    uvicorn.run(app, host = "0.0.0.0", port = 8000, log_level="info")
