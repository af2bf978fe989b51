"""
Symptom/Disease Relevance Scorer

raw_score(condition) = sum of relevance(condition, s) x symptom_score(s)
over reported symptoms with relevance > 0.

A condition is kept only when enough of the reported symptoms match it
(matched / reported >= threshold). Failing conditions are dropped before
any boosting.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..medical_data.disease_database import DiseaseEntry, DISEASE_DATABASE
from .symptom_normalizer import fuzzy_lookup, get_symptom_score

SIMPLE_MATCH_THRESHOLD = 0.15
ADVANCED_MATCH_THRESHOLD = 0.30


@dataclass(frozen=True)
class ConditionMatch:
    """Relevance evidence for one reference condition."""
    disease: DiseaseEntry
    raw_score: float
    matched_symptoms: Tuple[str, ...] = field(default_factory=tuple)
    match_ratio: float = 0.0

    @property
    def name(self) -> str:
        return self.disease.name


def get_relevance(disease: DiseaseEntry, symptom: str) -> float:
    """Relevance of a symptom for a condition, 0 when unrelated."""
    match = fuzzy_lookup(symptom, disease.symptom_relevance)
    if match is None:
        return 0.0
    return match[1]


def match_condition(disease: DiseaseEntry, symptoms: List[str]) -> ConditionMatch:
    """Score a single condition against the reported symptoms."""
    raw_score = 0.0
    matched = []

    for symptom in symptoms:
        relevance = get_relevance(disease, symptom)
        if relevance > 0:
            raw_score += relevance * get_symptom_score(symptom)
            matched.append(symptom)

    ratio = len(matched) / len(symptoms) if symptoms else 0.0
    return ConditionMatch(
        disease=disease,
        raw_score=raw_score,
        matched_symptoms=tuple(matched),
        match_ratio=ratio,
    )


def score_relevance(
    symptoms: List[str],
    threshold: float = SIMPLE_MATCH_THRESHOLD,
    database: Optional[Tuple[DiseaseEntry, ...]] = None,
) -> List[ConditionMatch]:
    """
    Match every reference condition and keep those above the threshold.

    Args:
        symptoms: Normalized symptom tokens
        threshold: Minimum matched-symptom ratio
        database: Reference conditions (defaults to DISEASE_DATABASE)

    Returns:
        Retained matches in reference declaration order
    """
    if not symptoms:
        return []

    retained = []
    for disease in DISEASE_DATABASE if database is None else database:
        result = match_condition(disease, symptoms)
        if result.matched_symptoms and result.match_ratio >= threshold:
            retained.append(result)
    return retained
