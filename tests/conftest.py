"""
Shared fixtures for advisory tests
"""

import pytest

from agents.weather.models import CurrentWeather, ForecastDay, WeatherSnapshot


def build_snapshot(
    rainfall=0.0,
    humidity=50,
    temperature=25.0,
    wind=5.0,
    condition="Clear",
    forecast_rainfall=None,
    consecutive_rainy_days=0,
    location="Chennai, India",
):
    forecast = [
        ForecastDay(day_offset=i, temp_max_c=32, temp_min_c=24, condition="Clear", rainfall_mm=mm)
        for i, mm in enumerate(forecast_rainfall or [])
    ]
    return WeatherSnapshot(
        current=CurrentWeather(
            temperature_c=temperature,
            humidity_pct=humidity,
            rainfall_mm=rainfall,
            wind_speed_kmh=wind,
            condition=condition,
            description=condition.lower(),
        ),
        forecast=forecast,
        consecutive_rainy_days=consecutive_rainy_days,
        location=location,
    )


@pytest.fixture
def make_snapshot():
    return build_snapshot


@pytest.fixture
def dry_snapshot():
    return build_snapshot(rainfall=0.0, humidity=50, temperature=25.0, condition="Clear")


@pytest.fixture
def rainy_snapshot():
    return build_snapshot(
        rainfall=12.0,
        humidity=88,
        temperature=26.0,
        condition="Rain",
        forecast_rainfall=[10, 12, 30, 35, 40],
        consecutive_rainy_days=3,
    )
