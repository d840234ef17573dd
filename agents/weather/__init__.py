# agents/weather/__init__.py
"""
Weather provider package
"""

from .models import CurrentWeather, ForecastDay, WeatherSnapshot
from .service import WeatherService

__all__ = ["WeatherService", "WeatherSnapshot", "CurrentWeather", "ForecastDay"]
