# agents/advisory/crop_calendar.py
"""
Crop stage rule engine - daily farming actions for a declared growth stage

The same generic rule set applies to every crop, known or not. CROP_DATA is
reference metadata and is not used to select rules.
"""
from typing import Any, Dict, List, Optional

from agents.advisory.models import (
    ActionType, CropContext, CropStage, DailyAction, Priority, WeatherSnapshot
)

CROP_DATA: Dict[str, Dict[str, Any]] = {
    "Paddy": {"seasons": ["Kharif", "Rabi"], "duration_days": 120},
    "Maize": {"seasons": ["Kharif", "Rabi"], "duration_days": 100},
    "Cotton": {"seasons": ["Kharif"], "duration_days": 150},
    "Groundnut": {"seasons": ["Kharif", "Rabi"], "duration_days": 110},
    "Wheat": {"seasons": ["Rabi"], "duration_days": 120},
}

SOWING_POSTPONE_RAIN_MM = 5.0
SOWING_DRY_RAIN_MM = 2.0
IRRIGATION_HUMIDITY_PCT = 60
SKIP_IRRIGATION_RAIN_MM = 5.0
WINDY_KMH = 20.0
HEAT_STRESS_C = 40.0

GROWING_STAGES = (CropStage.VEGETATIVE, CropStage.FLOWERING)
HARVEST_STAGES = (CropStage.MATURITY, CropStage.HARVEST)


def known_crops() -> List[Dict[str, Any]]:
    return [
        {"name": name, "seasons": list(info["seasons"]), "duration_days": info["duration_days"]}
        for name, info in CROP_DATA.items()
    ]


def _monitor_field(crop: str) -> DailyAction:
    return DailyAction(
        type=ActionType.GENERAL,
        label="Monitor Field",
        description=f"Conditions are stable. Monitor {crop} for pests.",
        icon="Eye",
        priority=Priority.LOW,
    )


def generate_daily_actions(
    snapshot: WeatherSnapshot,
    crop_name: Optional[str],
    stage: Optional[CropStage]
) -> List[DailyAction]:
    """
    Recommend today's actions for a crop at the given stage.

    Several rules may fire at once. When none does, a single "Monitor Field"
    action is returned. Without a declared crop (non-blank name and a stage)
    only that fallback is returned.
    """
    current = snapshot.current
    crop = crop_name.strip() if crop_name and crop_name.strip() else "your crop"

    # Stage rules need both a crop name and a stage
    if not CropContext(crop_name=crop_name, stage=stage).is_declared:
        return [_monitor_field(crop)]

    actions: List[DailyAction] = []
    is_raining = current.rainfall_mm > 0 or "rain" in current.condition.lower()
    is_windy = current.wind_speed_kmh > WINDY_KMH

    if stage == CropStage.SOWING:
        if is_raining and current.rainfall_mm > SOWING_POSTPONE_RAIN_MM:
            actions.append(DailyAction(
                type=ActionType.ALERT,
                label="Postpone Sowing",
                description=f"Rain detected ({current.rainfall_mm}mm). Soil may be too wet for {crop}.",
                icon="CloudRain",
                priority=Priority.HIGH,
            ))
        elif current.rainfall_mm < SOWING_DRY_RAIN_MM and not is_raining:
            actions.append(DailyAction(
                type=ActionType.SOW,
                label="Good for Sowing",
                description="Weather is clear. Good conditions to sow if soil moisture is optimal.",
                icon="Sprout",
                priority=Priority.HIGH,
            ))

    if stage in GROWING_STAGES:
        if not is_raining and current.humidity_pct < IRRIGATION_HUMIDITY_PCT:
            actions.append(DailyAction(
                type=ActionType.IRRIGATE,
                label="Irrigate Today",
                description="Dry conditions detected. Ensure crop has sufficient water.",
                icon="Droplets",
                priority=Priority.MEDIUM,
            ))
        elif is_raining or current.rainfall_mm > SKIP_IRRIGATION_RAIN_MM:
            actions.append(DailyAction(
                type=ActionType.GENERAL,
                label="Skip Irrigation",
                description=f"Rain detected. Natural moisture is sufficient for {crop}.",
                icon="CloudOff",
                priority=Priority.LOW,
            ))

        if is_windy or is_raining:
            actions.append(DailyAction(
                type=ActionType.ALERT,
                label="Do Not Spray/Fertilize",
                description="Strong winds or rain will wash away inputs. Wait for calm weather.",
                icon="Wind",
                priority=Priority.HIGH,
            ))
        elif stage == CropStage.VEGETATIVE:
            actions.append(DailyAction(
                type=ActionType.FERTILIZE,
                label="Safe to Fertilize",
                description="Calm weather. Good time for nutrient application if scheduled.",
                icon="FlaskConical",
                priority=Priority.MEDIUM,
            ))

    if stage in HARVEST_STAGES:
        if is_raining:
            actions.append(DailyAction(
                type=ActionType.ALERT,
                label="Protect Crop",
                description=f"Rain risk! Cover {crop} immediately or improve field drainage.",
                icon="Umbrella",
                priority=Priority.HIGH,
            ))
        else:
            actions.append(DailyAction(
                type=ActionType.HARVEST,
                label="Harvest Preparation",
                description="Dry weather safe for harvesting or drying.",
                icon="Tractor",
                priority=Priority.HIGH,
            ))

    if current.temperature_c > HEAT_STRESS_C:
        actions.append(DailyAction(
            type=ActionType.ALERT,
            label="Heat Stress Alert",
            description="Extreme heat. Mulch soil to retain moisture.",
            icon="ThermometerSun",
            priority=Priority.HIGH,
        ))

    if not actions:
        actions.append(_monitor_field(crop))

    return actions
