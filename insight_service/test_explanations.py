"""
Explanation Selector Tests
==========================

LLM explanation routing with fake adapters (no network):
1. Successful generation
2. Fallback across providers
3. Safety filter rejects unsafe phrasing
4. Disabled selector and unconfigured adapters
5. Timeouts
6. Decorating an analysis keeps the ranking
7. Local contribution scores, rule traces and full reports
"""

import asyncio

import pytest

from insight_service.engines.explainability import ExplainabilityEngine
from insight_service.engines.likelihood_engine import LikelihoodEngine
from insight_service.model_adapters.api_model_adapter import (
    APIAdapter,
    GroqAdapter,
    OpenRouterAdapter,
    RateLimitError,
    get_api_adapter,
)
from insight_service.model_adapters.explanation_selector import (
    SOURCE_LLM,
    SOURCE_TEMPLATE,
    ExplanationSelector,
)
from insight_service.safety_config import DISCLAIMER

TEMPLATE_TEXT = "This condition may be considered based on dry eyes and dry mouth."


class FakeAdapter(APIAdapter):
    def __init__(self, name, reply=None, error=None, configured=True, delay=0.0):
        self.name = name
        self.reply = reply
        self.error = error
        self.configured = configured
        self.delay = delay
        self.prompts = []

    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, prompt: str, **kwargs) -> str:
        self.prompts.append((prompt, kwargs.get("system_prompt")))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.reply


def _selector(*adapters, timeout=5.0):
    return ExplanationSelector(adapters=list(adapters), enabled=True, timeout=timeout)


@pytest.mark.asyncio
async def test_explain_uses_llm_text():
    adapter = FakeAdapter("fake", reply="  Dry eyes and dry mouth often appear together here.  ")
    text, source = await _selector(adapter).explain(
        "Sjögren's Syndrome", ["dry eyes", "dry mouth"], 1.0
    )

    assert source == SOURCE_LLM
    assert text == "Dry eyes and dry mouth often appear together here."
    prompt, system_prompt = adapter.prompts[0]
    assert "Sjögren's Syndrome" in prompt
    assert "dry eyes, dry mouth" in prompt
    assert "100%" in prompt
    assert system_prompt


@pytest.mark.asyncio
async def test_explain_falls_back_to_next_provider():
    failing = FakeAdapter("first", error=RateLimitError("429"))
    broken = FakeAdapter("second", error=ConnectionError("down"))
    working = FakeAdapter("third", reply="These symptoms are commonly linked.")

    text, source = await _selector(failing, broken, working).explain(
        "Sjögren's Syndrome", ["dry eyes", "dry mouth"], 0.8
    )

    assert source == SOURCE_LLM
    assert text == "These symptoms are commonly linked."
    assert failing.prompts and broken.prompts and working.prompts


@pytest.mark.asyncio
async def test_unsafe_text_is_replaced_by_template():
    adapter = FakeAdapter("fake", reply="You are diagnosed with Sjögren's Syndrome.")
    text, source = await _selector(adapter).explain(
        "Sjögren's Syndrome", ["dry eyes", "dry mouth"], 1.0
    )
    assert source == SOURCE_TEMPLATE
    assert text == TEMPLATE_TEXT


@pytest.mark.asyncio
async def test_empty_reply_is_replaced_by_template():
    adapter = FakeAdapter("fake", reply="   ")
    text, source = await _selector(adapter).explain(
        "Sjögren's Syndrome", ["dry eyes", "dry mouth"], 1.0
    )
    assert source == SOURCE_TEMPLATE
    assert text == TEMPLATE_TEXT


@pytest.mark.asyncio
async def test_disabled_selector_never_calls_adapters():
    adapter = FakeAdapter("fake", reply="Should not be used.")
    selector = ExplanationSelector(adapters=[adapter], enabled=False)

    text, source = await selector.explain("Sjögren's Syndrome", ["dry eyes", "dry mouth"], 1.0)

    assert source == SOURCE_TEMPLATE
    assert text == TEMPLATE_TEXT
    assert adapter.prompts == []


@pytest.mark.asyncio
async def test_unconfigured_adapter_is_skipped():
    missing = FakeAdapter("missing", reply="unused", configured=False)
    working = FakeAdapter("working", reply="These symptoms are commonly linked.")
    selector = _selector(missing, working)

    text, source = await selector.explain("Sjögren's Syndrome", ["dry eyes"], 1.0)

    assert source == SOURCE_LLM
    assert missing.prompts == []
    assert selector.get_status() == {"enabled": True, "providers": ["working"]}


@pytest.mark.asyncio
async def test_slow_adapter_times_out():
    slow = FakeAdapter("slow", reply="Too late.", delay=1.0)
    text, source = await _selector(slow, timeout=0.05).explain(
        "Sjögren's Syndrome", ["dry eyes", "dry mouth"], 1.0
    )
    assert source == SOURCE_TEMPLATE
    assert text == TEMPLATE_TEXT


@pytest.mark.asyncio
async def test_decorate_keeps_ranking():
    analysis = LikelihoodEngine().analyze(["weight loss", "heart palpitations", "anxiety"])
    adapter = FakeAdapter("fake", reply="These symptoms are commonly linked.")

    decorated = await _selector(adapter).decorate(analysis)

    assert [c.condition for c in decorated.conditions] == [c.condition for c in analysis.conditions]
    assert [c.likelihood for c in decorated.conditions] == [c.likelihood for c in analysis.conditions]
    assert all(c.explanation == "These symptoms are commonly linked." for c in decorated.conditions)
    assert decorated.close_call_label == analysis.close_call_label


@pytest.mark.asyncio
async def test_decorate_disabled_returns_same_analysis():
    analysis = LikelihoodEngine().analyze(["dry eyes", "dry mouth"])
    selector = ExplanationSelector(adapters=[], enabled=False)
    assert await selector.decorate(analysis) is analysis


@pytest.mark.asyncio
async def test_unconfigured_hosted_adapter_raises(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    adapter = GroqAdapter()
    assert not adapter.is_configured()
    with pytest.raises(ValueError):
        await adapter.generate("hello")


@pytest.mark.asyncio
async def test_generate_with_fallback_tries_next_model():
    class FlakyGroq(GroqAdapter):
        async def generate(self, prompt, model=None, **kwargs):
            if model == "llama-70b":
                raise RateLimitError("429")
            return f"reply from {model}"

    adapter = FlakyGroq(api_key="test-key")
    assert await adapter.generate_with_fallback("hello") == "reply from llama-8b"


def test_get_api_adapter():
    assert isinstance(get_api_adapter("groq", api_key="k"), GroqAdapter)
    assert isinstance(get_api_adapter("openrouter", api_key="k"), OpenRouterAdapter)
    with pytest.raises(ValueError):
        get_api_adapter("unknown")


def test_openrouter_sends_title_header():
    headers = OpenRouterAdapter(api_key="k")._headers()
    assert headers["Authorization"] == "Bearer k"
    assert headers["X-Title"] == "Wellness Insight"


# ===== LOCAL EXPLAINABILITY =====

def test_symptom_contributions():
    engine = ExplainabilityEngine()
    contributions = engine.symptom_contributions("Sjögren's Syndrome", ["dry eyes", "purple elbows"])
    assert contributions == {"dry eyes": 0.18}
    assert engine.symptom_contributions("Unknown Condition", ["dry eyes"]) == {}


def test_rule_trace_lists_support_and_missing_hallmarks():
    trace = ExplainabilityEngine().rule_trace("Sjögren's Syndrome", ["dry eyes"])
    assert trace == [
        "'dry eyes' is highly associated with Sjögren's Syndrome (relevance: 0.90)",
        "Key symptom 'dry mouth' not reported for Sjögren's Syndrome",
    ]


def test_full_report_covers_top_conditions():
    symptoms = ["weight loss", "heart palpitations", "anxiety"]
    analysis = LikelihoodEngine().analyze(symptoms).to_dict()

    report = ExplainabilityEngine().generate_full_report(analysis, symptoms, top_conditions=2)

    assert report["observed_symptoms"] == symptoms
    assert report["disclaimer"] == DISCLAIMER
    assert [c["condition"] for c in report["top_conditions"]] == [
        c["condition"] for c in analysis["conditions"][:2]
    ]
    top = report["top_conditions"][0]
    assert top["confidence_level"] == "high"
    assert top["narrative"].startswith(f"**{top['condition']}** (100% relative likelihood")
    assert top["rule_trace"]
