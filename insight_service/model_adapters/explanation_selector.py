"""
Explanation Selector - LLM routing for condition explanations

Decision rules:
- LLM explanations are off unless USE_LLM_EXPLANATIONS=true
- Preferred provider first (LLM_PROVIDER), the other as fallback
- Rate limits, network errors, timeouts, malformed payloads and
  safety-filter violations all fall back to the local template

Runs outside the scoring core: the ranked list is computed first, then
explanations are decorated here and awaited by the caller.
"""

import os
import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from ..engines.explainability import ExplainabilityEngine
from ..engines.likelihood_engine import AnalysisResult
from ..safety_config import SYSTEM_PROMPT, safety_filter
from .api_model_adapter import APIAdapter, RateLimitError, get_api_adapter, API_ADAPTERS

logger = logging.getLogger(__name__)

# Environment variables for LLM configuration
USE_LLM_EXPLANATIONS = os.getenv("USE_LLM_EXPLANATIONS", "false").lower() == "true"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "groq").lower()
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "20"))

SOURCE_LLM = "llm"
SOURCE_TEMPLATE = "template"

RECOVERABLE_ERRORS = (
    RateLimitError,
    ConnectionError,
    ValueError,
    asyncio.TimeoutError,
    KeyError,
    IndexError,
    TypeError,
)


def default_adapters(preferred: str = LLM_PROVIDER) -> List[APIAdapter]:
    """Preferred provider first, then the remaining ones."""
    order = [preferred] + [p for p in API_ADAPTERS if p != preferred]
    return [
        get_api_adapter(p, timeout=LLM_TIMEOUT_SECONDS)
        for p in order
        if p in API_ADAPTERS
    ]


class ExplanationSelector:
    """
    Routes explanation requests to configured LLM adapters with a
    template fallback.
    """

    def __init__(
        self,
        adapters: Optional[List[APIAdapter]] = None,
        enabled: bool = None,
        timeout: float = LLM_TIMEOUT_SECONDS
    ):
        self.adapters = adapters if adapters is not None else default_adapters()
        self.enabled = USE_LLM_EXPLANATIONS if enabled is None else enabled
        self.timeout = timeout
        self.explainability = ExplainabilityEngine()

    def available_adapters(self) -> List[APIAdapter]:
        return [a for a in self.adapters if a.is_configured()]

    def get_status(self) -> Dict[str, object]:
        return {
            "enabled": self.enabled,
            "providers": [a.name for a in self.available_adapters()],
        }

    def build_prompt(self, condition: str, matched_symptoms: List[str], likelihood: float) -> str:
        symptoms = ", ".join(matched_symptoms) or "the reported symptoms"
        return (
            f"Condition: {condition}\n"
            f"Reported symptoms that match it: {symptoms}\n"
            f"Relative likelihood in this summary: {likelihood*100:.0f}%\n\n"
            "In one or two sentences, explain in plain language why these "
            "symptoms can be associated with this condition."
        )

    async def explain(
        self,
        condition: str,
        matched_symptoms: List[str],
        likelihood: float
    ) -> Tuple[str, str]:
        """
        Explanation for one condition.

        Returns:
            (explanation text, source) where source is "llm" or "template"
        """
        if self.enabled:
            prompt = self.build_prompt(condition, matched_symptoms, likelihood)
            for adapter in self.available_adapters():
                try:
                    text = await asyncio.wait_for(
                        adapter.generate(prompt, system_prompt=SYSTEM_PROMPT),
                        timeout=self.timeout,
                    )
                except RECOVERABLE_ERRORS as e:
                    logger.warning(f"{adapter.name} explanation failed for {condition}: {e}")
                    continue

                text = (text or "").strip()
                if not text:
                    logger.warning(f"{adapter.name} returned an empty explanation for {condition}")
                    continue

                is_safe, error = safety_filter(text)
                if not is_safe:
                    logger.warning(f"{adapter.name} explanation blocked for {condition}: {error}")
                    continue

                return text, SOURCE_LLM

        template = self.explainability.template_explanation(condition, matched_symptoms, likelihood)
        return template, SOURCE_TEMPLATE

    async def decorate(self, analysis: AnalysisResult) -> AnalysisResult:
        """
        Replace template explanations with generated ones where possible.

        The ranked list itself is never changed.
        """
        if not self.enabled or not analysis.conditions:
            return analysis

        results = await asyncio.gather(*[
            self.explain(c.condition, list(c.matched_symptoms), c.likelihood)
            for c in analysis.conditions
        ])
        explanations = {
            c.condition: text
            for c, (text, source) in zip(analysis.conditions, results)
            if source == SOURCE_LLM
        }
        return analysis.with_explanations(explanations)
