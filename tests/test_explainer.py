"""
Unit tests for the advisory explainer (LLM mocked)
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from agents.advisory.crop_calendar import generate_daily_actions
from agents.advisory.explainer import AdvisoryExplainer, FALLBACK_EXPLANATION
from agents.advisory.harvest import classify_harvest
from agents.advisory.models import CropContext, CropStage, EnrichmentStatus
from core.exceptions import EnrichmentError


def fake_llm(content=None, error=None):
    llm = MagicMock()
    if error is not None:
        llm.invoke.side_effect = error
    else:
        llm.invoke.return_value = SimpleNamespace(content=content)
    return llm


@pytest.fixture
def paddy_context():
    return CropContext(crop_name="Paddy", stage=CropStage.VEGETATIVE)


class TestExplain:

    def test_returns_model_text(self, rainy_snapshot, paddy_context):
        llm = fake_llm("  Rain is enough for your paddy today, skip watering.  ")
        explainer = AdvisoryExplainer({}, llm=llm)
        actions = generate_daily_actions(rainy_snapshot, "Paddy", CropStage.VEGETATIVE)

        text = explainer.explain(actions, rainy_snapshot, paddy_context, "en", "Kharif (Monsoon)")

        assert text == "Rain is enough for your paddy today, skip watering."
        system, human = llm.invoke.call_args.args[0]
        assert "English" in system.content
        assert "Paddy" in human.content
        assert "Skip Irrigation" in human.content
        assert "Kharif (Monsoon)" in human.content

    def test_language_name_in_prompt(self, rainy_snapshot, paddy_context):
        llm = fake_llm("ठीक है")
        explainer = AdvisoryExplainer({}, llm=llm)

        explainer.explain([], rainy_snapshot, paddy_context, "hi")

        system, _ = llm.invoke.call_args.args[0]
        assert "Hindi" in system.content

    def test_unknown_language_falls_back_to_english(self):
        assert AdvisoryExplainer({}, llm=fake_llm("ok")).language_name("fr") == "English"

    def test_unconfigured_explainer_raises(self, rainy_snapshot, paddy_context):
        explainer = AdvisoryExplainer({})

        assert explainer.available is False
        with pytest.raises(EnrichmentError):
            explainer.explain([], rainy_snapshot, paddy_context)

    def test_empty_reply_raises(self, rainy_snapshot, paddy_context):
        explainer = AdvisoryExplainer({}, llm=fake_llm("   "))

        with pytest.raises(EnrichmentError):
            explainer.explain([], rainy_snapshot, paddy_context)

    def test_safe_explain_success(self, rainy_snapshot, paddy_context):
        explainer = AdvisoryExplainer({}, llm=fake_llm("Skip watering today."))
        result = explainer.explain_safely([], rainy_snapshot, paddy_context)

        assert result.status == EnrichmentStatus.SUCCESS
        assert result.succeeded
        assert result.text == "Skip watering today."

    def test_safe_explain_failure_uses_fallback(self, rainy_snapshot, paddy_context):
        explainer = AdvisoryExplainer({}, llm=fake_llm(error=RuntimeError("quota exceeded")))
        result = explainer.explain_safely([], rainy_snapshot, paddy_context)

        assert result.status == EnrichmentStatus.FAILURE
        assert not result.succeeded
        assert result.text == FALLBACK_EXPLANATION
        assert "quota exceeded" in result.error


class TestExplainHarvest:

    def test_parses_fenced_json(self, rainy_snapshot):
        reply = (
            "```json\n"
            '{"bestCrops": ["Paddy", "Sugarcane"], "reasoning": "Wait for dry days.", '
            '"precautions": ["Cover harvested grain"]}\n'
            "```"
        )
        explainer = AdvisoryExplainer({}, llm=fake_llm(reply))
        advice = explainer.explain_harvest(classify_harvest(rainy_snapshot), rainy_snapshot)

        assert advice.status == EnrichmentStatus.SUCCESS
        assert advice.best_crops == ["Paddy", "Sugarcane"]
        assert advice.reasoning == "Wait for dry days."
        assert advice.precautions == ["Cover harvested grain"]

    def test_non_json_reply_becomes_reasoning(self, rainy_snapshot):
        explainer = AdvisoryExplainer({}, llm=fake_llm("Wait two days before harvesting."))
        advice = explainer.explain_harvest(classify_harvest(rainy_snapshot), rainy_snapshot)

        assert advice.status == EnrichmentStatus.SUCCESS
        assert advice.best_crops == []
        assert advice.reasoning == "Wait two days before harvesting."
        assert advice.precautions == ["Monitor moisture levels", "Keep storage ready"]

    def test_missing_reasoning_uses_rule_reason(self, rainy_snapshot):
        recommendation = classify_harvest(rainy_snapshot)
        explainer = AdvisoryExplainer({}, llm=fake_llm('{"bestCrops": ["Paddy"]}'))
        advice = explainer.explain_harvest(recommendation, rainy_snapshot)

        assert advice.reasoning == recommendation.reason
        assert advice.precautions == []

    def test_failure_falls_back_to_rule_reason(self, rainy_snapshot):
        recommendation = classify_harvest(rainy_snapshot)
        explainer = AdvisoryExplainer({}, llm=fake_llm(error=RuntimeError("network down")))
        advice = explainer.explain_harvest(recommendation, rainy_snapshot)

        assert advice.status == EnrichmentStatus.FAILURE
        assert advice.best_crops == ["Consult local expert"]
        assert advice.reasoning == recommendation.reason
        assert advice.precautions == ["Check local weather alerts"]
        assert "network down" in advice.error

    def test_explanation_never_changes_rule_output(self, rainy_snapshot):
        recommendation = classify_harvest(rainy_snapshot)
        before = recommendation.model_dump()
        explainer = AdvisoryExplainer({}, llm=fake_llm('{"bestCrops": [], "reasoning": "Harvest now!"}'))

        explainer.explain_harvest(recommendation, rainy_snapshot)

        assert recommendation.model_dump() == before
