"""
Unit tests for the OpenWeatherMap weather service
"""

from unittest.mock import MagicMock

import pytest
import requests

from agents.weather.service import WeatherService
from core.cache import CacheManager
from core.exceptions import WeatherUnavailableError

CONFIG = {
    "base_url": "https://api.example.test/data/2.5",
    "country_code": "IN",
    "units": "metric",
    "forecast_days": 5,
    "request_timeout_seconds": 10,
}

# 2025-07-15 00:00 UTC, a Tuesday
BASE_TS = 1752537600

CURRENT_PAYLOAD = {
    "name": "Chennai",
    "main": {"temp": 31.6, "humidity": 74, "feels_like": 36.2, "pressure": 1008},
    "weather": [{"main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    "wind": {"speed": 5},
    "rain": {"1h": 0.8},
    "visibility": 6000,
}


def slot(day, hour, temp, main="Clear", rain=None, icon="01d"):
    item = {
        "dt": BASE_TS + day * 86400 + hour * 3600,
        "main": {"temp": temp},
        "weather": [{"main": main, "icon": icon}],
    }
    if rain is not None:
        item["rain"] = {"3h": rain}
    return item


def forecast_payload(rainy_days, total_days=5):
    items = []
    for day in range(total_days):
        if day in rainy_days:
            items.append(slot(day, 6, 24, "Rain", rain=1.2, icon="10d"))
            items.append(slot(day, 12, 29, "Rain", rain=1.0, icon="10n"))
        else:
            items.append(slot(day, 6, 25, "Clear", icon="01d"))
            items.append(slot(day, 12, 33, "Clouds", icon="02d"))
    return {"list": items}


def response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    return resp


def make_service(*responses, cache=None, api_key="test-key"):
    session = MagicMock()
    session.get.side_effect = list(responses)
    return WeatherService(CONFIG, api_key=api_key, cache=cache, session=session), session


class TestParseCurrent:

    def test_normalizes_units(self):
        service, _ = make_service()
        current = service.parse_current(CURRENT_PAYLOAD)

        assert current.temperature_c == 32
        assert current.humidity_pct == 74
        assert current.rainfall_mm == 0.8
        assert current.wind_speed_kmh == 18
        assert current.condition == "Clouds"
        assert current.description == "broken clouds"
        assert current.feels_like_c == 36
        assert current.visibility_km == 6
        assert current.icon == "04d"

    def test_temperature_halves_round_up(self):
        service, _ = make_service()
        payload = dict(CURRENT_PAYLOAD, main={"temp": 27.5, "humidity": 74, "feels_like": 30.5})
        current = service.parse_current(payload)

        assert current.temperature_c == 28
        assert current.feels_like_c == 31

    def test_three_hour_rain_used_when_no_hourly_value(self):
        service, _ = make_service()
        payload = dict(CURRENT_PAYLOAD, rain={"3h": 4.2})

        assert service.parse_current(payload).rainfall_mm == 4.2

    def test_missing_rain_is_zero(self):
        service, _ = make_service()
        payload = {k: v for k, v in CURRENT_PAYLOAD.items() if k != "rain"}

        assert service.parse_current(payload).rainfall_mm == 0.0

    def test_malformed_payload_raises(self):
        service, _ = make_service()

        with pytest.raises(WeatherUnavailableError):
            service.parse_current({"weather": []})


class TestParseForecast:

    def test_groups_slots_by_day(self):
        service, _ = make_service()
        forecast, _ = service.parse_forecast(forecast_payload(rainy_days={0}))

        assert len(forecast) == 5
        today = forecast[0]
        assert today.day_offset == 0
        assert today.date == "2025-07-15"
        assert today.day_name == "Tue"
        assert today.temp_max_c == 29
        assert today.temp_min_c == 24
        assert today.condition == "Rain"
        assert today.rainfall_mm == 2
        assert today.icon == "10n"
        assert forecast[1].rainfall_mm == 0

    def test_keeps_at_most_five_days(self):
        service, _ = make_service()
        forecast, _ = service.parse_forecast(forecast_payload(rainy_days=set(), total_days=7))

        assert [day.day_offset for day in forecast] == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize("rainy_days,expected", [
        (set(), 0),
        ({2}, 1),
        ({0, 1, 3}, 2),
        ({1, 2, 3}, 3),
        ({0, 1, 2, 3, 4}, 5),
    ])
    def test_longest_rainy_streak(self, rainy_days, expected):
        service, _ = make_service()
        _, streak = service.parse_forecast(forecast_payload(rainy_days))

        assert streak == expected

    def test_rain_condition_without_amount_counts_as_rainy(self):
        service, _ = make_service()
        payload = {"list": [slot(0, 6, 25, "Rain"), slot(1, 6, 25, "Rain")]}
        _, streak = service.parse_forecast(payload)

        assert streak == 2

    def test_malformed_slots_are_skipped(self):
        service, _ = make_service()
        payload = {"list": [{"dt": BASE_TS}, slot(0, 6, 27)]}
        forecast, _ = service.parse_forecast(payload)

        assert len(forecast) == 1
        assert forecast[0].temp_max_c == 27

    def test_halves_round_up(self):
        service, _ = make_service()
        payload = {"list": [
            slot(0, 6, 24.5, "Rain", rain=1.5),
            slot(0, 12, 30.5, "Rain", rain=1.0),
        ]}
        forecast, _ = service.parse_forecast(payload)

        assert forecast[0].rainfall_mm == 3
        assert forecast[0].temp_min_c == 25
        assert forecast[0].temp_max_c == 31

    def test_empty_forecast(self):
        service, _ = make_service()

        assert service.parse_forecast({}) == ([], 0)


class TestFetch:

    def test_builds_snapshot(self):
        service, session = make_service(
            response(CURRENT_PAYLOAD), response(forecast_payload(rainy_days={0, 1}))
        )
        snapshot = service.fetch("Chennai")

        assert snapshot.location == "Chennai, India"
        assert snapshot.current.temperature_c == 32
        assert len(snapshot.forecast) == 5
        assert snapshot.consecutive_rainy_days == 2

        first_call = session.get.call_args_list[0]
        assert first_call.args[0] == "https://api.example.test/data/2.5/weather"
        assert first_call.kwargs["params"] == {"q": "Chennai,IN", "appid": "test-key", "units": "metric"}
        assert first_call.kwargs["timeout"] == 10
        assert session.get.call_args_list[1].args[0] == "https://api.example.test/data/2.5/forecast"

    def test_blank_location_raises(self):
        service, session = make_service()

        with pytest.raises(WeatherUnavailableError):
            service.fetch("   ")
        session.get.assert_not_called()

    def test_missing_api_key_raises(self):
        service, session = make_service(api_key=None)

        with pytest.raises(WeatherUnavailableError):
            service.fetch("Chennai")
        session.get.assert_not_called()

    def test_network_error_raises(self):
        service, _ = make_service(requests.ConnectionError("connection refused"))

        with pytest.raises(WeatherUnavailableError):
            service.fetch("Chennai")

    def test_http_error_raises(self):
        not_found = response({"cod": "404"})
        not_found.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        service, _ = make_service(not_found)

        with pytest.raises(WeatherUnavailableError):
            service.fetch("Atlantis")

    def test_invalid_json_raises(self):
        bad = MagicMock()
        bad.json.side_effect = ValueError("Expecting value")
        service, _ = make_service(bad)

        with pytest.raises(WeatherUnavailableError):
            service.fetch("Chennai")

    def test_forecast_failure_raises(self):
        service, _ = make_service(response(CURRENT_PAYLOAD), requests.Timeout("timed out"))

        with pytest.raises(WeatherUnavailableError):
            service.fetch("Chennai")

    def test_cache_reuses_snapshot_per_location(self):
        service, session = make_service(
            response(CURRENT_PAYLOAD), response(forecast_payload(rainy_days=set())),
            cache=CacheManager(),
        )
        first = service.fetch("Chennai")
        second = service.fetch("  chennai ")

        assert first == second
        assert session.get.call_count == 2

    def test_failure_is_not_cached(self):
        service, session = make_service(
            requests.ConnectionError("down"),
            response(CURRENT_PAYLOAD), response(forecast_payload(rainy_days=set())),
            cache=CacheManager(),
        )

        with pytest.raises(WeatherUnavailableError):
            service.fetch("Chennai")
        assert service.fetch("Chennai").location == "Chennai, India"
