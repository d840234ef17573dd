# api/v1/endpoints/weather.py
from fastapi import APIRouter, Query

from agents.base import agent_registry
from agents.weather.service import WeatherService
from core.config import get_settings

router = APIRouter()

def get_weather_service() -> WeatherService:
    """Reuse the advisory agent's client (and its cache) when registered"""
    advisory_agent = agent_registry.get("advisory")
    if advisory_agent is not None:
        return advisory_agent.weather_service

    settings = get_settings()
    return WeatherService(
        config=settings.get_agent_config("weather"),
        api_key=settings.openweather_api_key
    )

@router.get("/current")
def get_current_weather(
    location: str = Query(..., min_length=1, description="Village, town or district name")
):
    """
    Get the normalized weather snapshot for a location

    Current conditions plus up to 5 forecast days and the longest run of
    rainy forecast days, as consumed by the advisory engine.
    """
    # WeatherUnavailableError is mapped to 502 by the app error handler
    snapshot = get_weather_service().fetch(location)

    return {
        "success": True,
        "weather": snapshot,
        "note": "Weather from OpenWeatherMap"
    }
