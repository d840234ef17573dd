# api/v1/endpoints/advisory.py
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field
from typing import List, Optional

from agents.base import agent_registry
from agents.advisory.alerts import generate_smart_alerts
from agents.advisory.crop_calendar import generate_daily_actions, known_crops
from agents.advisory.flood_risk import assess_flood_risk
from agents.advisory.harvest import classify_harvest
from agents.advisory.models import (
    AdvisoryRequest, CropContext, CropStage, FloodRiskLevel, WeatherSnapshot
)
from agents.advisory.service import AdvisoryService

router = APIRouter()

VALID_STAGES = [stage.value for stage in CropStage]


class FloodRiskBody(BaseModel):
    rainfall_mm: float = Field(..., description="Current rainfall in mm")
    consecutive_rainy_days: int = Field(0, description="Consecutive days with rain")
    forecast_rainfall: List[float] = Field(default_factory=list, description="Forecast daily rainfall in mm")

class EvaluateBody(BaseModel):
    weather: WeatherSnapshot
    crop_context: Optional[CropContext] = None

class DailyActionsBody(BaseModel):
    weather: WeatherSnapshot
    crop_name: Optional[str] = None
    stage: Optional[CropStage] = None

class AlertsBody(BaseModel):
    weather: Optional[WeatherSnapshot] = None
    crop_name: Optional[str] = None
    stage: Optional[CropStage] = None
    flood_level: FloodRiskLevel = FloodRiskLevel.LOW


def parse_stage(stage: Optional[str]) -> Optional[CropStage]:
    if stage is None or not stage.strip():
        return None
    for candidate in CropStage:
        if candidate.value.lower() == stage.strip().lower():
            return candidate
    raise HTTPException(status_code=400, detail=f"Invalid stage. Must be one of: {VALID_STAGES}")


@router.get("/")
async def get_advisory(
    location: str = Query(..., min_length=1, description="Village, town or district name"),
    crop: Optional[str] = Query(None, description="Crop grown (free text, e.g. Paddy, Wheat)"),
    stage: Optional[str] = Query(None, description="Growth stage (Sowing, Vegetative, Flowering, Maturity, Harvest, Preparation)"),
    language: str = Query("en", description="Language for explanations (en, hi, ta, te)"),
    explain: bool = Query(False, description="Add an AI explanation of today's advice")
):
    """
    Get today's advisory for a location

    Fetches current weather and returns flood risk, harvest suitability,
    stage-specific daily actions and up to four smart alerts. When weather
    cannot be fetched the response has success=false and
    alerts_available=false.
    """
    advisory_agent = agent_registry.get("advisory")
    if not advisory_agent:
        raise HTTPException(status_code=500, detail="Advisory agent not available")

    request = AdvisoryRequest(
        location=location.strip(),
        crop_name=crop.strip() if crop else None,
        stage=parse_stage(stage),
        language=language,
        include_explanation=explain
    )

    try:
        return await advisory_agent.execute(request)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error processing advisory request: {str(e)}")

@router.post("/evaluate")
async def evaluate_advisory(body: EvaluateBody):
    """Run the full rule engine on a caller-supplied weather snapshot"""
    report = AdvisoryService().build_report(body.weather, body.crop_context)
    return {
        "success": True,
        "data": report,
        "alerts_available": report.alerts.available
    }

@router.post("/flood-risk")
async def get_flood_risk(body: FloodRiskBody):
    """Score flood risk from rainfall, rainy-day streak and forecast rainfall"""
    return assess_flood_risk(body.rainfall_mm, body.consecutive_rainy_days, body.forecast_rainfall)

@router.post("/harvest")
async def get_harvest_recommendation(weather: WeatherSnapshot):
    """Classify whether current conditions suit harvesting"""
    return classify_harvest(weather)

@router.post("/daily-actions")
async def get_daily_actions(body: DailyActionsBody):
    """Recommend today's farming actions for a crop stage"""
    actions = generate_daily_actions(body.weather, body.crop_name, body.stage)
    return {
        "success": True,
        "actions": actions
    }

@router.post("/alerts")
async def get_smart_alerts(body: AlertsBody):
    """Build today's capped alert list; available=false when weather is missing"""
    return generate_smart_alerts(body.weather, body.crop_name, body.stage, body.flood_level)

@router.get("/crops")
async def get_known_crops():
    """Get crops with season and duration metadata"""
    return {
        "success": True,
        "crops": known_crops(),
        "note": "Any crop name is accepted; advice uses the same rules for every crop"
    }

@router.get("/health")
async def advisory_health():
    """Check advisory agent health"""
    try:
        advisory_agent = agent_registry.get("advisory")
        if not advisory_agent:
            return {"status": "unhealthy", "error": "Advisory agent not available"}

        health = await advisory_agent.health_check()
        return health

    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}
