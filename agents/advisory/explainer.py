# agents/advisory/explainer.py
"""
Advisory explainer - optional natural-language elaboration using Google Generative AI

Explanations are additive text only. Nothing here feeds back into the rule
outputs, and every failure degrades to a fixed fallback string.
"""
import json
import re
from typing import Any, Dict, List, Optional
import logging

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.messages import HumanMessage, SystemMessage

from agents.advisory.models import (
    CropContext, DailyAction, Enrichment, EnrichmentStatus, HarvestAdvice,
    HarvestRecommendation, WeatherSnapshot
)
from core.exceptions import EnrichmentError

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "ta": "Tamil",
    "te": "Telugu",
}

FALLBACK_EXPLANATION = "Based on current weather, follow the recommended actions below."
FALLBACK_PRECAUTIONS = ["Check local weather alerts"]
FALLBACK_BEST_CROPS = ["Consult local expert"]

class AdvisoryExplainer:
    """Generates short farmer-facing explanations of rule outputs"""

    def __init__(self, config: Dict[str, Any], api_key: Optional[str] = None, llm: Any = None):
        self.config = config
        self.llm = llm

        if self.llm is None and api_key:
            self.llm = ChatGoogleGenerativeAI(
                model=config.get("llm_model", "gemini-1.5-flash"),
                temperature=config.get("llm_temperature", 0.3),
                google_api_key=api_key,
            )
            logger.info("Advisory explainer initialized with Google Generative AI")
        elif self.llm is None:
            logger.warning("No Gemini API key found - explanations will use fallback text")

    @property
    def available(self) -> bool:
        return self.llm is not None

    def language_name(self, language: Optional[str]) -> str:
        return LANGUAGE_NAMES.get((language or "en").lower(), "English")

    def _system_prompt(self, language: str) -> str:
        return (
            "You are AgriPulse, an agricultural advisor for Indian farmers. "
            "Explain the given rule-based advice in simple words. "
            "Talk about TODAY only and never contradict the advice you are given. "
            f"Respond in {self.language_name(language)}."
        )

    def _invoke(self, system_prompt: str, message: str) -> str:
        if not self.llm:
            raise EnrichmentError("Gemini API key not configured - cannot generate explanation")

        try:
            response = self.llm.invoke([
                SystemMessage(content=system_prompt),
                HumanMessage(content=message)
            ])
        except Exception as e:
            logger.error(f"Explanation request failed: {e}")
            raise EnrichmentError(f"Explanation request failed: {e}") from e

        text = response.content if isinstance(response.content, str) else str(response.content)
        text = text.strip()
        if not text:
            raise EnrichmentError("Empty explanation returned")
        return text

    def explain(
        self,
        actions: List[DailyAction],
        weather: WeatherSnapshot,
        crop_context: CropContext,
        language: str = "en",
        season: Optional[str] = None
    ) -> str:
        """1-2 sentence explanation of today's actions; raises EnrichmentError on failure"""
        current = weather.current
        message = (
            "Provide a 1-2 sentence daily farming advice for TODAY ONLY.\n"
            f"Context: Crop: {crop_context.crop_name or 'not specified'}, "
            f"Stage: {crop_context.stage.value if crop_context.stage else 'not specified'}, "
            f"Season: {season or 'unknown'}\n"
            f"Weather: {current.condition}, Temp: {current.temperature_c}°C, "
            f"Humidity: {current.humidity_pct}%, Rain: {current.rainfall_mm}mm.\n"
            f"Actions: {', '.join(action.label for action in actions)}.\n"
            f"Respond in {self.language_name(language)}. Do not mention future days."
        )
        return self._invoke(self._system_prompt(language), message)

    def explain_safely(self, *args, **kwargs) -> Enrichment:
        try:
            return Enrichment(status=EnrichmentStatus.SUCCESS, text=self.explain(*args, **kwargs))
        except EnrichmentError as e:
            return Enrichment(status=EnrichmentStatus.FAILURE, text=FALLBACK_EXPLANATION, error=str(e))

    def explain_harvest(
        self,
        recommendation: HarvestRecommendation,
        weather: WeatherSnapshot,
        language: str = "en"
    ) -> HarvestAdvice:
        """Harvest advice with suggested crops; falls back to the rule reason"""
        current = weather.current
        message = (
            "Provide harvest advice in JSON format:\n"
            f"Weather: {current.condition}, Temp: {current.temperature_c}°C, "
            f"Humidity: {current.humidity_pct}%, Rain: {current.rainfall_mm}mm.\n"
            f"Season: {recommendation.details.season}.\n"
            f"Status: {recommendation.status.value}, Reason: {recommendation.reason}.\n\n"
            'Respond ONLY in JSON: {"bestCrops": ["Crop1", "Crop2"], '
            f'"reasoning": "Brief explanation in {self.language_name(language)}", '
            '"precautions": ["Tip1", "Tip2"]}'
        )

        try:
            content = self._invoke(self._system_prompt(language), message)
        except EnrichmentError as e:
            return self.fallback_harvest_advice(recommendation, EnrichmentStatus.FAILURE, str(e))

        parsed = self._parse_json(content)
        if parsed is None:
            # Not JSON; keep the raw reply as the reasoning
            return HarvestAdvice(
                status=EnrichmentStatus.SUCCESS,
                best_crops=[],
                reasoning=content,
                precautions=["Monitor moisture levels", "Keep storage ready"],
            )

        return HarvestAdvice(
            status=EnrichmentStatus.SUCCESS,
            best_crops=[str(c) for c in parsed.get("bestCrops") or []],
            reasoning=parsed.get("reasoning") or recommendation.reason,
            precautions=[str(p) for p in parsed.get("precautions") or []],
        )

    def fallback_harvest_advice(
        self,
        recommendation: HarvestRecommendation,
        status: EnrichmentStatus,
        error: Optional[str] = None
    ) -> HarvestAdvice:
        return HarvestAdvice(
            status=status,
            best_crops=list(FALLBACK_BEST_CROPS),
            reasoning=recommendation.reason,
            precautions=list(FALLBACK_PRECAUTIONS),
            error=error,
        )

    def _parse_json(self, content: str) -> Optional[Dict[str, Any]]:
        cleaned = content.replace("```json", "").replace("```", "").strip()
        match = re.search(r"\{[\s\S]*\}", cleaned)
        if not match:
            return None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            logger.warning(f"Harvest advice was not valid JSON: {content[:200]}...")
            return None
        return data if isinstance(data, dict) else None
