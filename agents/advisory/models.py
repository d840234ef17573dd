# agents/advisory/models.py
"""
Pydantic models for the advisory agent
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from enum import Enum

from agents.weather.models import CurrentWeather, ForecastDay, WeatherSnapshot  # noqa: F401


# ---------- Enumerations ----------

class CropStage(str, Enum):
    SOWING = "Sowing"
    VEGETATIVE = "Vegetative"
    FLOWERING = "Flowering"
    MATURITY = "Maturity"
    HARVEST = "Harvest"
    PREPARATION = "Preparation"

class FloodRiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

class RiskTrend(str, Enum):
    INCREASING = "INCREASING"
    STABLE = "STABLE"
    DECREASING = "DECREASING"

class HarvestStatus(str, Enum):
    HARVEST = "HARVEST"
    CAUTION = "CAUTION"
    DELAY = "DELAY"

class ActionType(str, Enum):
    SOW = "SOW"
    IRRIGATE = "IRRIGATE"
    FERTILIZE = "FERTILIZE"
    SPRAY = "SPRAY"
    HARVEST = "HARVEST"
    GENERAL = "GENERAL"
    ALERT = "ALERT"

class Priority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

class AlertType(str, Enum):
    WEATHER = "WEATHER"
    HARVEST = "HARVEST"
    IRRIGATE = "IRRIGATE"
    DISEASE = "DISEASE"
    FLOOD = "FLOOD"
    GENERAL = "GENERAL"

class AlertSeverity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

class EnrichmentStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    TIMEOUT = "TIMEOUT"
    SKIPPED = "SKIPPED"


# ---------- Crop context ----------

class CropContext(BaseModel):
    crop_name: Optional[str] = Field(None, description="Free-text crop name, never validated")
    stage: Optional[CropStage] = Field(None, description="User-declared growth stage")

    @property
    def is_declared(self) -> bool:
        return bool(self.crop_name and self.crop_name.strip()) and self.stage is not None


# ---------- Rule outputs ----------

class FloodRiskResult(BaseModel):
    level: FloodRiskLevel
    score: int = Field(..., ge=0, le=100)
    rainfall_score: int
    days_score: int
    trend: RiskTrend
    advice: str
    tips: List[str]

class HarvestDetails(BaseModel):
    rainfall: str  # none, moderate, heavy
    humidity: str  # low, moderate, high
    temperature: str  # normal, extreme
    season: str

class HarvestRecommendation(BaseModel):
    status: HarvestStatus
    label: str
    reason: str
    details: HarvestDetails

class DailyAction(BaseModel):
    type: ActionType
    label: str
    description: str
    icon: str
    priority: Priority

class SmartAlert(BaseModel):
    id: str
    type: AlertType
    severity: AlertSeverity
    title: str
    message: str
    action: Optional[str] = None
    dismissible: bool = True
    is_general_advisory: bool = False

class SmartAlertsResult(BaseModel):
    alerts: List[SmartAlert] = Field(default_factory=list)
    available: bool = True
    message: Optional[str] = None


# ---------- Enrichment ----------

class Enrichment(BaseModel):
    status: EnrichmentStatus
    text: str
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == EnrichmentStatus.SUCCESS

class HarvestAdvice(BaseModel):
    status: EnrichmentStatus
    best_crops: List[str]
    reasoning: str
    precautions: List[str]
    error: Optional[str] = None


# ---------- Agent request / response ----------

class AdvisoryRequest(BaseModel):
    location: str = Field(..., min_length=1, description="Village, town or district name")
    crop_name: Optional[str] = Field(None, description="Crop grown (free text)")
    stage: Optional[CropStage] = Field(None, description="Current growth stage")
    language: str = Field("en", description="Language tag for explanations (en, hi, ta, te)")
    include_explanation: bool = Field(False, description="Ask the LLM for explanatory text")

    @property
    def crop_context(self) -> CropContext:
        return CropContext(crop_name=self.crop_name, stage=self.stage)

class AdvisoryReport(BaseModel):
    location: str
    season: str
    weather: WeatherSnapshot
    crop_context: CropContext
    flood_risk: FloodRiskResult
    harvest: HarvestRecommendation
    daily_actions: List[DailyAction]
    alerts: SmartAlertsResult
    explanation: Optional[Enrichment] = None
    harvest_advice: Optional[HarvestAdvice] = None

class AdvisoryResponse(BaseModel):
    success: bool
    data: Optional[AdvisoryReport] = None
    alerts_available: bool = True
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
