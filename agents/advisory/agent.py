# agents/advisory/agent.py
"""
Advisory agent - today's flood risk, harvest window, crop actions and alerts
for a location
"""

import asyncio
from functools import partial
from typing import Optional, Tuple, Type
from datetime import datetime

from agents.base import BaseAgent
from agents.advisory.explainer import AdvisoryExplainer, FALLBACK_EXPLANATION
from agents.advisory.models import (
    AdvisoryReport, AdvisoryRequest, AdvisoryResponse, Enrichment,
    EnrichmentStatus, HarvestAdvice, WeatherSnapshot
)
from agents.advisory.service import AdvisoryService
from agents.weather.service import WeatherService
from core.cache import CacheManager
from core.exceptions import WeatherUnavailableError

class AdvisoryAgent(BaseAgent[AdvisoryRequest, AdvisoryResponse]):
    """
    Rule-based agronomic advisory agent

    Features:
    - Weather snapshot from OpenWeatherMap
    - Flood risk score, level and trend
    - Harvest suitability classification
    - Stage-specific daily farming actions
    - Capped, ordered smart alerts
    - Optional Gemini explanation that never changes the rule outputs
    """

    def __init__(
        self,
        weather_service: Optional[WeatherService] = None,
        explainer: Optional[AdvisoryExplainer] = None
    ):
        super().__init__("advisory")
        self.service = AdvisoryService(config=self.config)
        self.weather_service = weather_service or self._build_weather_service()
        self.explainer = explainer or AdvisoryExplainer(
            config=self.config,
            api_key=self.settings.gemini_api_key,
        )
        self.explanation_timeout = float(self.config.get("explanation_timeout_seconds", 8.0))
        self.logger.info("Advisory agent initialized")

    def _build_weather_service(self) -> WeatherService:
        """Weather client with its own snapshot cache at the weather ttl"""
        weather_config = self.settings.get_agent_config("weather")
        cache = None
        if self.settings.cache_enabled:
            cache = CacheManager(ttl=int(weather_config.get("cache_ttl_seconds", self.settings.cache_default_ttl)))

        return WeatherService(
            config=weather_config,
            api_key=self.settings.openweather_api_key,
            cache=cache,
        )

    def _validate_config(self) -> None:
        """Validate advisory agent configuration"""
        required_config = ["explanation_timeout_seconds", "default_language"]

        missing = [key for key in required_config if key not in self.config]
        if missing:
            self.logger.warning(f"Missing advisory config (using defaults): {missing}")

    def _get_response_class(self) -> Type[AdvisoryResponse]:
        return AdvisoryResponse

    def should_cache(self, response: AdvisoryResponse) -> bool:
        if not response.success or response.data is None:
            return False
        explanation = response.data.explanation
        return explanation is None or explanation.succeeded

    async def process_request(self, request: AdvisoryRequest) -> AdvisoryResponse:
        """Process advisory request"""

        self.logger.info(
            f"Processing advisory request for '{request.location}' "
            f"(crop={request.crop_name}, stage={request.stage.value if request.stage else None})"
        )

        # Step 1: Fetch weather (blocking client, off the event loop)
        snapshot = await self._fetch_weather(request.location)

        # Step 2: Run the rule engine
        report = self.service.build_report(snapshot, request.crop_context)

        # Step 3: Best-effort explanation, bounded by a timeout
        if request.include_explanation:
            explanation, harvest_advice = await self._enrich(report, request)
            report = report.model_copy(update={
                "explanation": explanation,
                "harvest_advice": harvest_advice,
            })

        flood = report.flood_risk
        message = (
            f"{report.harvest.label}. Flood risk {flood.level.value.lower()} "
            f"({flood.score}/100, {flood.trend.value.lower()}). "
            f"{len(report.alerts.alerts)} alert(s) today."
        )

        return AdvisoryResponse(
            success=True,
            data=report,
            alerts_available=report.alerts.available,
            message=message,
            timestamp=datetime.now().isoformat(),
            metadata={
                "location": report.location,
                "season": report.season,
                "crop_declared": report.crop_context.is_declared,
                "forecast_days": len(snapshot.forecast),
                "method": "rule_based",
                "explanation_status": report.explanation.status.value if report.explanation else None
            }
        )

    async def _fetch_weather(self, location: str) -> WeatherSnapshot:
        """Fetch weather data asynchronously"""
        return await asyncio.get_running_loop().run_in_executor(
            None,
            self.weather_service.fetch,
            location
        )

    async def _enrich(
        self,
        report: AdvisoryReport,
        request: AdvisoryRequest
    ) -> Tuple[Enrichment, HarvestAdvice]:
        """Ask the explainer for text; never raises and never blocks past the timeout"""
        if not self.explainer.available:
            return (
                Enrichment(
                    status=EnrichmentStatus.SKIPPED,
                    text=FALLBACK_EXPLANATION,
                    error="Explainer not configured"
                ),
                self.explainer.fallback_harvest_advice(
                    report.harvest, EnrichmentStatus.SKIPPED, "Explainer not configured"
                ),
            )

        loop = asyncio.get_running_loop()
        language = request.language or self.config.get("default_language", "en")

        explain_call = loop.run_in_executor(None, partial(
            self.explainer.explain_safely,
            report.daily_actions,
            report.weather,
            report.crop_context,
            language,
            report.season,
        ))
        harvest_call = loop.run_in_executor(None, partial(
            self.explainer.explain_harvest,
            report.harvest,
            report.weather,
            language,
        ))

        explanation, harvest_advice = await asyncio.gather(
            asyncio.wait_for(explain_call, timeout=self.explanation_timeout),
            asyncio.wait_for(harvest_call, timeout=self.explanation_timeout),
            return_exceptions=True,
        )

        if isinstance(explanation, BaseException):
            self.logger.warning(f"Explanation unavailable: {explanation!r}")
            explanation = Enrichment(
                status=self._failure_status(explanation),
                text=FALLBACK_EXPLANATION,
                error=str(explanation) or type(explanation).__name__,
            )

        if isinstance(harvest_advice, BaseException):
            self.logger.warning(f"Harvest advice unavailable: {harvest_advice!r}")
            harvest_advice = self.explainer.fallback_harvest_advice(
                report.harvest,
                self._failure_status(harvest_advice),
                str(harvest_advice) or type(harvest_advice).__name__,
            )

        return explanation, harvest_advice

    def _failure_status(self, error: BaseException) -> EnrichmentStatus:
        if isinstance(error, asyncio.TimeoutError):
            return EnrichmentStatus.TIMEOUT
        return EnrichmentStatus.FAILURE

    def get_fallback_response(self, request: AdvisoryRequest, error: Exception) -> AdvisoryResponse:
        """Get fallback response when the advisory cannot be computed"""
        if isinstance(error, WeatherUnavailableError):
            message = (
                f"Weather data unavailable for '{request.location}'. "
                "Alerts unavailable - please try again later."
            )
        else:
            message = f"Advisory unavailable due to error: {str(error)}"

        return AdvisoryResponse(
            success=False,
            data=None,
            alerts_available=False,
            message=message,
            timestamp=datetime.now().isoformat(),
            metadata={"fallback": True, "error": str(error)}
        )
