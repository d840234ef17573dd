# agents/weather/models.py
"""
Pydantic models for normalized weather snapshots
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CurrentWeather(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature_c: float = Field(..., description="Air temperature in °C")
    humidity_pct: int = Field(..., ge=0, le=100, description="Relative humidity in percent")
    rainfall_mm: float = Field(0.0, ge=0, description="Recent rainfall in mm (last 1h or 3h)")
    wind_speed_kmh: float = Field(0.0, ge=0, description="Wind speed in km/h")
    condition: str = Field("Clear", description="Main condition, e.g. Rain, Clouds, Thunderstorm")
    description: str = Field("", description="Free-text condition description")
    feels_like_c: Optional[float] = None
    pressure_hpa: Optional[float] = None
    visibility_km: Optional[float] = None
    icon: Optional[str] = None

class ForecastDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    day_offset: int = Field(..., ge=0, description="Days from today (0 = today)")
    date: Optional[str] = None
    day_name: Optional[str] = None
    temp_max_c: float
    temp_min_c: float
    condition: str = "Clear"
    rainfall_mm: float = Field(0.0, ge=0)
    icon: Optional[str] = None

class WeatherSnapshot(BaseModel):
    """Normalized weather for one location, produced fresh on every fetch"""
    model_config = ConfigDict(frozen=True)

    current: CurrentWeather
    forecast: List[ForecastDay] = Field(default_factory=list, max_length=5)
    consecutive_rainy_days: int = Field(0, ge=0)
    location: str = ""

    def forecast_rainfall(self) -> List[float]:
        return [day.rainfall_mm for day in self.forecast]
