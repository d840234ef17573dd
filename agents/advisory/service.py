# agents/advisory/service.py
"""
Advisory service - runs every rule component over one weather snapshot
"""
from datetime import date
from typing import Any, Dict, Optional
import logging

from agents.advisory.alerts import generate_smart_alerts
from agents.advisory.crop_calendar import generate_daily_actions
from agents.advisory.flood_risk import assess_snapshot
from agents.advisory.harvest import classify_harvest, determine_season
from agents.advisory.models import AdvisoryReport, CropContext, WeatherSnapshot

logger = logging.getLogger(__name__)

class AdvisoryService:
    """Composes flood risk, harvest, daily actions and alerts into one report"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    def build_report(
        self,
        snapshot: WeatherSnapshot,
        crop_context: Optional[CropContext] = None,
        today: Optional[date] = None
    ) -> AdvisoryReport:
        """Pure function of its inputs; callers re-invoke on every change"""
        crop_context = crop_context or CropContext()
        today = today or date.today()

        flood_risk = assess_snapshot(snapshot)
        harvest = classify_harvest(snapshot, today=today)
        daily_actions = generate_daily_actions(snapshot, crop_context.crop_name, crop_context.stage)
        alerts = generate_smart_alerts(
            snapshot, crop_context.crop_name, crop_context.stage, flood_risk.level
        )

        logger.info(
            f"Advisory for '{snapshot.location or 'unknown'}': flood={flood_risk.level.value}"
            f"({flood_risk.score}), harvest={harvest.status.value}, "
            f"actions={len(daily_actions)}, alerts={len(alerts.alerts)}"
        )

        return AdvisoryReport(
            location=snapshot.location,
            season=determine_season(today.month),
            weather=snapshot,
            crop_context=crop_context,
            flood_risk=flood_risk,
            harvest=harvest,
            daily_actions=daily_actions,
            alerts=alerts,
        )
