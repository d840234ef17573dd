# agents/advisory/harvest.py
"""
Harvest suitability classifier

Rules are evaluated top to bottom and the first match wins:
heavy rain -> moderate rain -> high humidity -> extreme temperature -> good.
Season is attached as metadata only and never changes the status.
"""
from datetime import date
from typing import Optional

from agents.advisory.models import (
    HarvestDetails, HarvestRecommendation, HarvestStatus, WeatherSnapshot
)

RAIN_KEYWORDS = ("rain", "drizzle", "thunderstorm")

HEAVY_RAIN_MM = 10.0
HEAVY_RAIN_WITH_CONDITION_MM = 5.0
HIGH_HUMIDITY_PCT = 80
LOW_HUMIDITY_PCT = 40
EXTREME_HEAT_C = 35.0
EXTREME_COLD_C = 5.0

KHARIF = "Kharif (Monsoon)"
RABI = "Rabi (Winter)"
ZAID = "Zaid (Summer)"


def is_rain_condition(condition: str) -> bool:
    text = (condition or "").lower()
    return any(keyword in text for keyword in RAIN_KEYWORDS)


def determine_season(month: int) -> str:
    """Indian cropping season for a calendar month (1-12)"""
    if 6 <= month <= 10:
        return KHARIF
    if month >= 11 or month <= 2:
        return RABI
    return ZAID


def classify_rainfall(rainfall_mm: float, condition: str) -> str:
    raining = is_rain_condition(condition)
    if rainfall_mm > HEAVY_RAIN_MM or (raining and rainfall_mm > HEAVY_RAIN_WITH_CONDITION_MM):
        return "heavy"
    if rainfall_mm > 0 or raining:
        return "moderate"
    return "none"


def classify_humidity(humidity_pct: int) -> str:
    if humidity_pct > HIGH_HUMIDITY_PCT:
        return "high"
    if humidity_pct < LOW_HUMIDITY_PCT:
        return "low"
    return "moderate"


def classify_temperature(temperature_c: float) -> str:
    if temperature_c > EXTREME_HEAT_C or temperature_c < EXTREME_COLD_C:
        return "extreme"
    return "normal"


def classify_harvest(snapshot: WeatherSnapshot, today: Optional[date] = None) -> HarvestRecommendation:
    """Classify whether current conditions suit harvesting"""
    current = snapshot.current
    today = today or date.today()

    details = HarvestDetails(
        rainfall=classify_rainfall(current.rainfall_mm, current.condition),
        humidity=classify_humidity(current.humidity_pct),
        temperature=classify_temperature(current.temperature_c),
        season=determine_season(today.month),
    )

    if details.rainfall == "heavy":
        return HarvestRecommendation(
            status=HarvestStatus.DELAY,
            label="Do Not Harvest",
            reason="Heavy rain detected. Harvesting now risks crop spoilage and fungal growth.",
            details=details,
        )

    if details.rainfall == "moderate":
        return HarvestRecommendation(
            status=HarvestStatus.DELAY,
            label="Delay Recommended",
            reason="Light to moderate rain detected. Wait for dry spell to prevent moisture issues.",
            details=details,
        )

    if details.humidity == "high":
        return HarvestRecommendation(
            status=HarvestStatus.CAUTION,
            label="Harvest with Caution",
            reason="High humidity (>80%) detected. Ensure immediate drying or proper storage ventilation.",
            details=details,
        )

    if details.temperature == "extreme":
        return HarvestRecommendation(
            status=HarvestStatus.CAUTION,
            label="Harvest Early Morning",
            reason="Extreme temperatures detected. Harvest during cooler hours to reduce crop stress.",
            details=details,
        )

    return HarvestRecommendation(
        status=HarvestStatus.HARVEST,
        label="Good to Harvest",
        reason="Weather conditions are dry and stable. Suitable for harvesting.",
        details=details,
    )
