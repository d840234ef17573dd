# agents/advisory/alerts.py
"""
Smart alert aggregator - today-only alerts from weather, crop stage and flood risk

Rules, in evaluation order:
1. Weather/fertilizer - rain or high humidity
2. Harvest window     - maturity/harvest stage and dry, stable weather
3. Irrigation         - no rain and warm temperature
4. Disease watch      - flowering stage and very high humidity
5. Flood risk         - medium or high flood risk level

At most MAX_ALERTS are returned, in that order.
"""
from typing import List, Optional

from agents.advisory.models import (
    AlertSeverity, AlertType, CropContext, CropStage, FloodRiskLevel,
    SmartAlert, SmartAlertsResult, WeatherSnapshot
)

MAX_ALERTS = 4

HIGH_HUMIDITY_PCT = 75
VERY_HIGH_HUMIDITY_PCT = 80
DRY_HUMIDITY_PCT = 65
WARM_TEMPERATURE_C = 28.0

UNAVAILABLE_MESSAGE = "Alerts unavailable: weather data could not be loaded for this location."


def generate_smart_alerts(
    snapshot: Optional[WeatherSnapshot],
    crop_name: Optional[str],
    stage: Optional[CropStage],
    flood_level: FloodRiskLevel
) -> SmartAlertsResult:
    """Build the capped alert list for the current conditions"""
    if snapshot is None:
        return SmartAlertsResult(alerts=[], available=False, message=UNAVAILABLE_MESSAGE)

    current = snapshot.current
    has_crop_stage = CropContext(crop_name=crop_name, stage=stage).is_declared

    is_raining = current.rainfall_mm > 0 or "rain" in current.condition.lower()
    is_high_humidity = current.humidity_pct > HIGH_HUMIDITY_PCT
    is_very_high_humidity = current.humidity_pct > VERY_HIGH_HUMIDITY_PCT
    is_dry_and_stable = (
        not is_raining
        and current.humidity_pct < DRY_HUMIDITY_PCT
        and current.condition != "Thunderstorm"
    )
    is_warm = current.temperature_c >= WARM_TEMPERATURE_C

    alerts: List[SmartAlert] = []

    if is_raining or is_high_humidity:
        alerts.append(SmartAlert(
            id="weather-fertilizer",
            type=AlertType.WEATHER,
            severity=AlertSeverity.MEDIUM,
            title="Avoid fertilizer today",
            message="Reason: Rain or high humidity may reduce fertilizer effectiveness",
            action="Postpone Application",
            dismissible=True,
        ))

    if has_crop_stage and stage in (CropStage.MATURITY, CropStage.HARVEST) and is_dry_and_stable:
        alerts.append(SmartAlert(
            id="harvest-window",
            type=AlertType.HARVEST,
            severity=AlertSeverity.LOW,
            title="Good harvest window today",
            message="Reason: Dry weather reduces spoilage risk",
            action="Plan Harvest",
            dismissible=True,
        ))

    if not is_raining and is_warm:
        alerts.append(SmartAlert(
            id="irrigation-needed",
            type=AlertType.IRRIGATE,
            severity=AlertSeverity.INFO,
            title="Light irrigation recommended today",
            message="Reason: Soil moisture may be low due to heat and no rain",
            action="Irrigate",
            dismissible=True,
        ))

    if has_crop_stage and stage == CropStage.FLOWERING and is_very_high_humidity:
        alerts.append(SmartAlert(
            id="disease-watch",
            type=AlertType.DISEASE,
            severity=AlertSeverity.HIGH,
            title="Disease watch today",
            message="Reason: High humidity increases fungal disease risk",
            action="Inspect Leaves",
            dismissible=True,
        ))

    if flood_level == FloodRiskLevel.HIGH:
        alerts.append(SmartAlert(
            id="flood-critical",
            type=AlertType.FLOOD,
            severity=AlertSeverity.HIGH,
            title="Flood risk detected",
            message="Reason: Avoid harvesting or fertilizer application today",
            action="Protect Crops",
            dismissible=False,
        ))
    elif flood_level == FloodRiskLevel.MEDIUM:
        alerts.append(SmartAlert(
            id="flood-caution",
            type=AlertType.FLOOD,
            severity=AlertSeverity.MEDIUM,
            title="Moderate flood risk",
            message="Reason: Monitor conditions and keep drainage clear",
            action="Check Drainage",
            dismissible=True,
        ))

    # Without a declared crop every non-flood alert is weather-only advice
    if not has_crop_stage:
        alerts = [
            alert if alert.type == AlertType.FLOOD
            else alert.model_copy(update={"is_general_advisory": True})
            for alert in alerts
        ]

    return SmartAlertsResult(alerts=alerts[:MAX_ALERTS], available=True)
