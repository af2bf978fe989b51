"""
Body-System Analyzer

Which body systems does a presentation involve, and how well does a
condition's system footprint overlap with it?
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..medical_data.system_map import (
    BodySystem,
    SYMPTOM_SYSTEM_MAP,
    CONDITION_SYSTEM_MAP,
    DEFAULT_SYSTEM,
)
from .symptom_normalizer import fuzzy_lookup, get_symptom_score

# Multi-system boost: presentation spans >= 3 systems, condition >= 2
MULTI_SYSTEM_MIN_INVOLVED = 3
MULTI_SYSTEM_MIN_CONDITION = 2
MULTI_SYSTEM_BOOST = 1.5


@dataclass(frozen=True)
class SystemInvolvement:
    system: BodySystem
    matched_symptoms: Tuple[str, ...] = field(default_factory=tuple)
    score: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "system": self.system.value,
            "matched_symptoms": list(self.matched_symptoms),
            "score": round(self.score, 4),
        }


def systems_for_symptom(symptom: str) -> List[BodySystem]:
    match = fuzzy_lookup(symptom, SYMPTOM_SYSTEM_MAP)
    return list(match[1]) if match else [DEFAULT_SYSTEM]


def systems_for_condition(condition_name: str) -> List[BodySystem]:
    return list(CONDITION_SYSTEM_MAP.get(condition_name, [DEFAULT_SYSTEM]))


def analyze_systems(symptoms: List[str]) -> List[SystemInvolvement]:
    """
    Group symptoms by body system.

    Returns:
        Involved systems only, by descending score (ties in enum order)
    """
    matched: Dict[BodySystem, List[str]] = {}
    scores: Dict[BodySystem, float] = {}

    for symptom in symptoms:
        systems = systems_for_symptom(symptom)
        share = get_symptom_score(symptom) / len(systems)
        for system in systems:
            matched.setdefault(system, []).append(symptom)
            scores[system] = scores.get(system, 0.0) + share

    involved = [
        SystemInvolvement(system=s, matched_symptoms=tuple(matched[s]), score=scores[s])
        for s in BodySystem
        if s in matched
    ]
    involved.sort(key=lambda si: si.score, reverse=True)
    return involved


def system_overlap(condition_name: str, involved: List[BodySystem]) -> float:
    """|condition systems n involved| / max(|condition systems|, |involved|)"""
    condition_systems = set(systems_for_condition(condition_name))
    involved_systems = set(involved)
    denominator = max(len(condition_systems), len(involved_systems))
    if denominator == 0:
        return 0.0
    return len(condition_systems & involved_systems) / denominator


def multi_system_boost(condition_name: str, involved: List[BodySystem]) -> float:
    if (
        len(set(involved)) >= MULTI_SYSTEM_MIN_INVOLVED
        and len(systems_for_condition(condition_name)) >= MULTI_SYSTEM_MIN_CONDITION
    ):
        return MULTI_SYSTEM_BOOST
    return 1.0
