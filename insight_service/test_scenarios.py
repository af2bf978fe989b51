"""
Likelihood Scenario Tests
=========================

End-to-end behaviour of the LikelihoodEngine:
1. Urgent red flag (chest pain + fainting)
2. Endocrine picture (weight loss + palpitations + anxiety)
3. Single vague symptom (fatigue)
4. Explicit duration beats inference ("for 3 weeks")
5. Output invariants over a spread of inputs
6. Determinism and the optional explanation collaborator
"""

import pytest

from insight_service.engines.likelihood_engine import LikelihoodEngine, AnalysisResult
from insight_service.engines.time_course import TimePattern
from insight_service.engines.display_policy import (
    CLOSE_CALL_LABEL,
    LOW_LIKELIHOOD_TEXT,
)
from insight_service.medical_data import ClusterTag

ENDOCRINE_CARDIAC = {
    "Hyperthyroidism",
    "Graves' Disease",
    "Pheochromocytoma",
    "Diabetes Mellitus Type 2",
    "Adrenal Insufficiency",
    "POTS (Postural Orthostatic Tachycardia Syndrome)",
    "Autonomic Dysfunction",
}

SAMPLE_INPUTS = [
    (["chest pain", "fainting", "difficulty breathing"], []),
    (["weight loss", "heart palpitations", "anxiety"], []),
    (["fatigue"], []),
    (["fatigue", "joint pain"], ["for 3 weeks", "it comes and goes"]),
    ("numbness; tingling; blurred vision", ["getting worse over 2 months"]),
    (["fever", "migratory joint pain", "transient rash", "sore throat"], ["sudden onset"]),
    (["weight loss", "night sweats", "swollen glands"], ["lost 6 kg in the last 6 weeks"]),
    (["orthostatic dizziness", "numbness", "fatigue"], ["dizzy when i stand up"]),
    (["purple elbows"], []),
    ("", []),
]


@pytest.fixture(scope="module")
def engine():
    return LikelihoodEngine()


@pytest.fixture(scope="module")
def simple_engine():
    return LikelihoodEngine(mode="simple")


# ===== SCENARIOS =====

def test_chest_pain_with_fainting_is_urgent(engine):
    result = engine.analyze(["chest pain", "fainting", "difficulty breathing"])
    urgent = [f for f in result.red_flags if f.urgent]
    assert urgent
    assert urgent[0].name == "Chest Pain with Syncope or Severe Breathing Difficulty"
    assert result.urgent


def test_weight_loss_palpitations_anxiety_ranks_thyroid_first(engine):
    result = engine.analyze(["weight loss", "heart palpitations", "anxiety"])
    names = [c.condition for c in result.conditions]

    assert names[0] in ("Hyperthyroidism", "Graves' Disease")
    assert set(names) <= ENDOCRINE_CARDIAC
    assert all(c.likelihood > 0 for c in result.conditions)
    assert all(c.display_text != "0%" for c in result.conditions)


def test_weight_loss_palpitations_anxiety_is_close_call(engine):
    result = engine.analyze(["weight loss", "heart palpitations", "anxiety"])
    assert result.close_call_label == CLOSE_CALL_LABEL
    assert [c.condition for c in result.conditions] == [
        "Hyperthyroidism",
        "Graves' Disease",
        "Pheochromocytoma",
    ]


def test_simple_mode_ranks_by_weighted_sum(simple_engine):
    result = simple_engine.analyze(["weight loss", "heart palpitations", "anxiety"])
    assert result.mode == "simple"
    assert result.close_call_label is None
    assert [c.condition for c in result.conditions] == [
        "Graves' Disease",
        "Hyperthyroidism",
        "Pheochromocytoma",
        "Lymphoma",
        "Diabetes Mellitus Type 2",
    ]
    assert result.conditions[0].display_text == "100%"
    assert result.conditions[1].display_text == "82%"


def test_single_vague_symptom(engine):
    result = engine.analyze(["fatigue"])
    assert isinstance(result, AnalysisResult)
    assert result.time_course.pattern != TimePattern.UNKNOWN
    assert result.time_course.derived is True
    assert 0 < len(result.conditions) <= 5


def test_explicit_duration_takes_precedence(engine):
    result = engine.analyze(["fatigue"], ["for 3 weeks"])
    assert result.time_course.duration_days == 21
    assert result.time_course.derived is False
    assert result.time_course.pattern == TimePattern.CHRONIC


def test_empty_input_gives_empty_ranking(engine):
    result = engine.analyze("")
    assert result.conditions == ()
    assert result.close_call_label is None
    assert result.dominant_clusters == (ClusterTag.METABOLIC_NUTRITIONAL,)
    assert result.time_course.pattern == TimePattern.CHRONIC
    assert result.time_course.duration_days == 30
    assert result.time_course.interpretation


def test_original_casing_kept_for_display(engine):
    result = engine.analyze("Weight Loss, Heart Palpitations, Anxiety")
    top = result.conditions[0]
    assert "Weight Loss" in top.matched_symptoms
    assert top.explanation == (
        "This condition may be considered based on Weight Loss and "
        "Heart Palpitations and other symptoms."
    )


def test_condition_fields_come_from_reference_table(engine):
    result = engine.analyze(["dry eyes", "dry mouth"])
    sjogren = next(c for c in result.conditions if c.condition == "Sjögren's Syndrome")
    assert sjogren.external_reference_term == "sjogren syndrome"
    assert sjogren.clusters == (ClusterTag.AUTOIMMUNE,)
    assert sjogren.description.startswith("Autoimmune disorder causing dry eyes")


# ===== INVARIANTS =====

@pytest.mark.parametrize("symptoms, answers", SAMPLE_INPUTS)
@pytest.mark.parametrize("mode", ["advanced", "simple"])
def test_output_invariants(symptoms, answers, mode):
    result = LikelihoodEngine(mode=mode).analyze(symptoms, answers)

    for condition in result.conditions:
        assert 0.05 <= condition.likelihood <= 1.0
        if condition.likelihood >= 0.10:
            assert "%" in condition.display_text
        else:
            assert condition.display_text == LOW_LIKELIHOOD_TEXT
        assert condition.explanation

    likelihoods = [c.likelihood for c in result.conditions]
    assert likelihoods == sorted(likelihoods, reverse=True)
    assert len(result.conditions) <= 5
    if likelihoods and likelihoods[0] < 0.40:
        assert len(result.conditions) <= 3
    if result.close_call_label:
        assert len(result.conditions) <= 3

    interpretation = result.time_course.interpretation
    assert interpretation
    assert "not available" not in interpretation.lower()
    assert "unavailable" not in interpretation.lower()
    assert result.time_course.pattern != TimePattern.UNKNOWN


@pytest.mark.parametrize("symptoms, answers", SAMPLE_INPUTS)
def test_analysis_is_deterministic(engine, symptoms, answers):
    first = engine.analyze(symptoms, answers, {"age": "34", "gender": "female"})
    second = engine.analyze(symptoms, answers, {"age": "34", "gender": "female"})
    assert first == second
    assert first.to_dict() == second.to_dict()


# ===== EXPLANATION COLLABORATOR =====

def test_explainer_collaborator_is_used():
    calls = []

    def explainer(name, matched, likelihood):
        calls.append((name, tuple(matched), likelihood))
        return f"{name} fits {', '.join(matched)}."

    result = LikelihoodEngine(explainer=explainer).analyze(["dry eyes", "dry mouth"])
    assert calls
    assert result.conditions[0].explanation == calls[0][0] + " fits dry eyes, dry mouth."


def test_failing_explainer_falls_back_to_template():
    def explainer(name, matched, likelihood):
        raise RuntimeError("model offline")

    result = LikelihoodEngine(explainer=explainer).analyze(["dry eyes", "dry mouth"])
    assert result.conditions[0].explanation == (
        "This condition may be considered based on dry eyes and dry mouth."
    )


def test_blank_explainer_output_falls_back_to_template():
    result = LikelihoodEngine(explainer=lambda *_: "   ").analyze(["dry eyes", "dry mouth"])
    assert result.conditions[0].explanation.startswith("This condition may be considered based on")
