# agents/weather/service.py
"""
Weather service - OpenWeatherMap current conditions and 5-day forecast,
normalized into a WeatherSnapshot
"""
import math
import requests
from collections import Counter, OrderedDict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import logging

from agents.weather.models import CurrentWeather, ForecastDay, WeatherSnapshot
from core.cache import CacheManager
from core.exceptions import WeatherUnavailableError

logger = logging.getLogger(__name__)

class WeatherService:
    """Fetches and normalizes weather for a location name"""

    MS_TO_KMH = 3.6

    def __init__(self, config: Dict[str, Any], api_key: Optional[str] = None,
                 cache: Optional[CacheManager] = None, session: Optional[requests.Session] = None):
        self.config = config
        self.api_key = api_key
        self.base_url = config.get("base_url", "https://api.openweathermap.org/data/2.5")
        self.country_code = config.get("country_code", "IN")
        self.units = config.get("units", "metric")
        self.forecast_days = int(config.get("forecast_days", 5))
        self.timeout = config.get("request_timeout_seconds", 10)
        self.cache = cache
        self.session = session or requests.Session()

    # ---------- helpers ----------

    def _safe_num(self, v, default: float = 0.0) -> float:
        try:
            return float(v)
        except (TypeError, ValueError):
            return default

    def _round(self, v: float) -> int:
        # half up; round() would turn 2.5 into 2
        return int(math.floor(v + 0.5))

    def _most_frequent(self, values: List[str]) -> str:
        if not values:
            return "Clear"
        return Counter(values).most_common(1)[0][0]

    def _cache_key(self, location: str) -> str:
        return f"weather:{location.strip().lower()}"

    def _get(self, endpoint: str, location: str) -> Dict[str, Any]:
        params = {
            "q": f"{location},{self.country_code}",
            "appid": self.api_key,
            "units": self.units,
        }
        try:
            resp = self.session.get(f"{self.base_url}/{endpoint}", params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.error(f"OpenWeatherMap {endpoint} request failed for '{location}': {e}")
            raise WeatherUnavailableError(f"Weather data fetch failed: {e}") from e
        except ValueError as e:
            logger.error(f"OpenWeatherMap {endpoint} returned invalid JSON for '{location}'")
            raise WeatherUnavailableError("Weather provider returned an invalid response") from e

    # ---------- normalization ----------

    def parse_current(self, payload: Dict[str, Any]) -> CurrentWeather:
        try:
            main = payload["main"]
            weather = (payload.get("weather") or [{}])[0]
        except (KeyError, TypeError) as e:
            raise WeatherUnavailableError(f"Malformed current weather payload: missing {e}") from e

        rain = payload.get("rain") or {}
        wind = payload.get("wind") or {}

        return CurrentWeather(
            temperature_c=self._round(self._safe_num(main.get("temp"))),
            humidity_pct=self._round(self._safe_num(main.get("humidity"))),
            rainfall_mm=self._safe_num(rain.get("1h") or rain.get("3h")),
            wind_speed_kmh=self._round(self._safe_num(wind.get("speed")) * self.MS_TO_KMH),
            condition=weather.get("main") or "Clear",
            description=weather.get("description") or "",
            feels_like_c=self._round(self._safe_num(main.get("feels_like"))),
            pressure_hpa=self._safe_num(main.get("pressure")),
            visibility_km=self._round(self._safe_num(payload.get("visibility"), 10000.0) / 1000),
            icon=weather.get("icon"),
        )

    def parse_forecast(self, payload: Dict[str, Any]) -> Tuple[List[ForecastDay], int]:
        """Group 3-hour forecast slots into days and count the longest rainy streak"""
        days: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()

        for item in payload.get("list") or []:
            try:
                ts = datetime.fromtimestamp(item["dt"], tz=timezone.utc)
                temp = self._safe_num(item["main"]["temp"])
            except (KeyError, TypeError, ValueError, OSError):
                logger.warning("Skipping malformed forecast slot")
                continue

            date_key = ts.date().isoformat()
            day = days.setdefault(date_key, {
                "date": date_key,
                "day_name": ts.strftime("%a"),
                "temps": [],
                "conditions": [],
                "icons": [],
                "rainfall": 0.0,
            })
            weather = (item.get("weather") or [{}])[0]
            day["temps"].append(temp)
            day["conditions"].append(weather.get("main") or "Clear")
            day["icons"].append(weather.get("icon"))
            day["rainfall"] += self._safe_num((item.get("rain") or {}).get("3h"))

        forecast: List[ForecastDay] = []
        consecutive_rainy_days = 0
        current_streak = 0

        for offset, day in enumerate(list(days.values())[:self.forecast_days]):
            has_rain = day["rainfall"] > 0 or "Rain" in day["conditions"]
            if has_rain:
                current_streak += 1
                consecutive_rainy_days = max(consecutive_rainy_days, current_streak)
            else:
                current_streak = 0

            forecast.append(ForecastDay(
                day_offset=offset,
                date=day["date"],
                day_name=day["day_name"],
                temp_max_c=self._round(max(day["temps"])),
                temp_min_c=self._round(min(day["temps"])),
                condition=self._most_frequent(day["conditions"]),
                rainfall_mm=self._round(day["rainfall"]),
                icon=day["icons"][len(day["icons"]) // 2],
            ))

        return forecast, consecutive_rainy_days

    # ---------- public API ----------

    def fetch(self, location: str) -> WeatherSnapshot:
        """
        Fetch a fresh snapshot for a location name.

        Raises WeatherUnavailableError on any failure; a failed fetch is never
        reported as zero rainfall.
        """
        if not location or not location.strip():
            raise WeatherUnavailableError("Location is required")

        if not self.api_key:
            logger.warning("OPENWEATHER_API_KEY not configured - weather unavailable")
            raise WeatherUnavailableError("Weather provider API key not configured")

        location = location.strip()
        cache_key = self._cache_key(location)
        if self.cache is not None:
            cached = self.cache.get_sync(cache_key)
            if cached is not None:
                logger.info(f"Weather cache hit for '{location}'")
                return cached

        current_payload = self._get("weather", location)
        forecast_payload = self._get("forecast", location)

        current = self.parse_current(current_payload)
        forecast, consecutive_rainy_days = self.parse_forecast(forecast_payload)

        snapshot = WeatherSnapshot(
            current=current,
            forecast=forecast,
            consecutive_rainy_days=consecutive_rainy_days,
            location=f"{current_payload.get('name') or location}, India",
        )

        if self.cache is not None:
            self.cache.set_sync(cache_key, snapshot)

        logger.info(
            f"Weather fetched for '{location}': {current.temperature_c}°C, "
            f"{current.rainfall_mm}mm, {len(forecast)} forecast days"
        )
        return snapshot
