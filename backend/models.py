#file: backend/models.py

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional

SensorStatus = Literal["online", "offline", "maintenance"]
Trend = Literal["improving", "worsening", "stable"]


class PollutantReading(BaseModel):
    pm25: Optional[float] = Field(None, ge=0, description="PM2.5 concentration (µg/m³)")
    pm10: Optional[float] = Field(None, ge=0, description="PM10 concentration (µg/m³)")
    no2: Optional[float] = Field(None, ge=0, description="NO2 concentration (ppb)")
    so2: Optional[float] = Field(None, ge=0, description="SO2 concentration (ppb)")
    co: Optional[float] = Field(None, ge=0, description="CO concentration (ppm)")
    o3: Optional[float] = Field(None, ge=0, description="O3 concentration (ppb)")


class AQIResult(BaseModel):
    value: int = Field(..., ge=0, le=500, description="Overall AQI, the worst pollutant sub-index")
    dominant_pollutant: str = Field(..., description="Pollutant whose sub-index equals the overall AQI")
    status: str = Field(..., description="Health category for the overall AQI")
    color: str = Field(..., description="Display colour for the health category")
    sub_indices: Dict[str, int] = Field(default_factory=dict, description="Rounded sub-index per pollutant")


class IoTSensor(BaseModel):
    sensor_id: str = Field(..., description="Unique identifier of the sensor")
    location: str = Field(..., description="Human readable place name")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    timestamp: datetime
    readings: PollutantReading
    temperature: Optional[float] = Field(None, description="Air temperature (°C)")
    humidity: Optional[float] = Field(None, ge=0, le=100, description="Relative humidity (%)")
    wind_speed: Optional[float] = Field(None, ge=0, description="Wind speed (km/h)")
    wind_direction: Optional[float] = Field(None, ge=0, le=360, description="Wind direction (degrees)")
    pressure: Optional[float] = Field(None, ge=0, description="Air pressure (hPa)")
    battery_level: int = Field(..., ge=0, le=100)
    signal_strength: int = Field(..., ge=0, le=100)
    status: SensorStatus
    last_calibration: datetime
    next_calibration: datetime


class NetworkStatus(BaseModel):
    total_sensors: int
    online_sensors: int
    offline_sensors: int
    maintenance_sensors: int
    average_battery_level: int
    average_signal_strength: int
    last_update: datetime


class SensorsResponse(BaseModel):
    sensors: List[IoTSensor]
    network_status: NetworkStatus


class HyperlocalResult(BaseModel):
    location: str
    latitude: float
    longitude: float
    radius_km: float
    aqi: int = Field(..., ge=0, le=500)
    dominant_pollutant: Optional[str] = None
    status: Optional[str] = None
    confidence: int = Field(..., ge=0, le=100)
    sensor_count: int = Field(..., ge=0)
    no_data: bool = Field(False, description="True when no online sensor lies within the radius")
    averages: PollutantReading = Field(default_factory=PollutantReading)
    recommendations: List[str] = Field(default_factory=list)
    last_updated: datetime


class HistoricalPoint(BaseModel):
    timestamp: datetime
    aqi: int = Field(..., ge=0, le=500)
    pm25: float = Field(..., ge=0)
    pm10: float = Field(..., ge=0)
    temperature: float
    humidity: float
    wind_speed: float


class ForecastPoint(BaseModel):
    timestamp: datetime
    aqi: int = Field(..., ge=0, le=500)
    main_pollutant: Literal["PM2.5", "PM10", "NO2"]
    confidence: float = Field(..., ge=0, le=100)
    weather_factor: Literal["Normal", "High Wind", "Rain Expected", "Stable Conditions"]


class ForecastResponse(BaseModel):
    historical: List[HistoricalPoint]
    forecast: List[ForecastPoint]
    trend: Trend
    generated_at: datetime


class CurrentAQI(BaseModel):
    aqi: int = Field(..., ge=0, le=500)
    main_pollutant: str
    status: str
    color: str
    location: str
    pollutants: PollutantReading
    source: Literal["openweather", "synthetic"]
    last_updated: datetime


class Station(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    aqi: int = Field(..., ge=0, le=500)
    status: str
    color: str
