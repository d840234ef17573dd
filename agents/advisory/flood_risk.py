# agents/advisory/flood_risk.py
"""
Flood risk assessment - rule-based scoring for Indian agricultural regions

Score is the sum of two banded sub-scores:
- rainfall contribution (0-60 points)
- consecutive rainy days contribution (0-40 points)

Level: score < 30 LOW, score < 60 MEDIUM, otherwise HIGH.
Inputs are assumed non-negative; they are not clamped.
"""
from typing import List, Sequence

from agents.advisory.models import (
    FloodRiskLevel, FloodRiskResult, RiskTrend, WeatherSnapshot
)

# (upper bound exclusive, points)
RAINFALL_BANDS = [(20, 0), (50, 15), (100, 35), (150, 50)]
RAINFALL_MAX_SCORE = 60

DAYS_BANDS = [(2, 0), (3, 10), (5, 25)]
DAYS_MAX_SCORE = 40

MEDIUM_THRESHOLD = 30
HIGH_THRESHOLD = 60

TREND_DELTA_MM = 10.0

FLOOD_ADVICE = {
    FloodRiskLevel.LOW: "Conditions are normal. Safe to proceed with regular farming activities.",
    FloodRiskLevel.MEDIUM: "Moderate flood risk. Keep drainage clear and monitor weather updates.",
    FloodRiskLevel.HIGH: "High flood risk! Protect crops, move equipment to higher ground, and stay safe.",
}

FLOOD_SAFETY_TIPS = {
    FloodRiskLevel.LOW: [
        "Continue regular farming activities",
        "Check and maintain drainage systems",
        "Monitor weather forecasts regularly",
    ],
    FloodRiskLevel.MEDIUM: [
        "Clear all drainage channels",
        "Move valuable equipment to higher ground",
        "Prepare sandbags if available",
        "Keep emergency supplies ready",
        "Stay updated with local weather alerts",
    ],
    FloodRiskLevel.HIGH: [
        "Move livestock to safe areas immediately",
        "Do not enter flooded fields",
        "Disconnect electrical equipment",
        "Store harvested crops in elevated areas",
        "Contact local authorities if needed",
        "Avoid travel during heavy rainfall",
    ],
}


def rainfall_sub_score(rainfall_mm: float) -> int:
    for upper, points in RAINFALL_BANDS:
        if rainfall_mm < upper:
            return points
    return RAINFALL_MAX_SCORE


def consecutive_days_sub_score(consecutive_rainy_days: int) -> int:
    for upper, points in DAYS_BANDS:
        if consecutive_rainy_days < upper:
            return points
    return DAYS_MAX_SCORE


def risk_level_for_score(score: int) -> FloodRiskLevel:
    if score < MEDIUM_THRESHOLD:
        return FloodRiskLevel.LOW
    if score < HIGH_THRESHOLD:
        return FloodRiskLevel.MEDIUM
    return FloodRiskLevel.HIGH


def get_flood_safety_tips(level: FloodRiskLevel) -> List[str]:
    """Get flood safety tips for a risk level (fresh list, safe to mutate)"""
    return list(FLOOD_SAFETY_TIPS[level])


def calculate_risk_trend(forecast_rainfall: Sequence[float]) -> RiskTrend:
    """
    Compare mean forecast rainfall of the second half against the first half.

    The split point is len // 2, so for odd lengths the second half holds the
    extra day. Fewer than two days never produces a trend.
    """
    if len(forecast_rainfall) < 2:
        return RiskTrend.STABLE

    mid = len(forecast_rainfall) // 2
    first_half = forecast_rainfall[:mid]
    second_half = forecast_rainfall[mid:]

    first_avg = sum(first_half) / len(first_half)
    second_avg = sum(second_half) / len(second_half)
    difference = second_avg - first_avg

    if difference > TREND_DELTA_MM:
        return RiskTrend.INCREASING
    if difference < -TREND_DELTA_MM:
        return RiskTrend.DECREASING
    return RiskTrend.STABLE


def assess_flood_risk(
    rainfall_mm: float,
    consecutive_rainy_days: int,
    forecast_rainfall: Sequence[float] = ()
) -> FloodRiskResult:
    """Score flood risk from current rainfall, rainy-day streak and forecast"""
    rainfall_score = rainfall_sub_score(rainfall_mm)
    days_score = consecutive_days_sub_score(consecutive_rainy_days)
    score = rainfall_score + days_score
    level = risk_level_for_score(score)

    return FloodRiskResult(
        level=level,
        score=score,
        rainfall_score=rainfall_score,
        days_score=days_score,
        trend=calculate_risk_trend(list(forecast_rainfall)),
        advice=FLOOD_ADVICE[level],
        tips=get_flood_safety_tips(level),
    )


def assess_snapshot(snapshot: WeatherSnapshot) -> FloodRiskResult:
    return assess_flood_risk(
        snapshot.current.rainfall_mm,
        snapshot.consecutive_rainy_days,
        snapshot.forecast_rainfall(),
    )
