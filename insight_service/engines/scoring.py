"""
Score Composer
==============

Fans the independent signals into one raw score per condition.

Two strategies:
- AdvancedScoringStrategy (primary): weighted multi-factor composition

      total = 0.40 x cluster_match
            + 0.20 x system_overlap (x1.5 for multi-system presentations)
            + 0.15 x normalize(time-course multiplier)
            + 0.10 x normalize(pattern multiplier)
            + 0.10 x demographic compatibility
            + 0.05 x normalize(red-flag multiplier)

- SimpleScoringStrategy (lightweight fallback): sum of
  relevance x symptom_score

Both apply the same priority-condition rules (x1.3) after composition.
The advanced strategy also drops conditions a rule explicitly excludes.
"""

import re
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..medical_data.disease_database import DiseaseEntry, DISEASE_DATABASE
from ..medical_data.system_map import BodySystem
from .relevance_scorer import (
    ConditionMatch,
    score_relevance,
    SIMPLE_MATCH_THRESHOLD,
    ADVANCED_MATCH_THRESHOLD,
)
from .system_analyzer import system_overlap, multi_system_boost
from .time_course import TimeCourseData, time_course_multiplier
from .pattern_detection import PatternMatch, pattern_multiplier
from .red_flags import RedFlagReport, red_flag_multiplier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignalContext:
    """Everything the extractors produced for one request."""
    symptoms: Tuple[str, ...]
    text: str
    time_course: TimeCourseData
    red_flags: RedFlagReport
    symptom_text: str = ""
    patterns: Tuple[PatternMatch, ...] = field(default_factory=tuple)
    involved_systems: Tuple[BodySystem, ...] = field(default_factory=tuple)
    age: Optional[int] = None


@dataclass(frozen=True)
class ScoredCondition:
    disease: DiseaseEntry
    score: float
    matched_symptoms: Tuple[str, ...]
    components: Dict[str, float] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.disease.name


# ===== PRIORITY CONDITIONS =====

@dataclass(frozen=True)
class PriorityRule:
    name: str
    # (symptom text, symptom + answer text) -> fired
    trigger: Callable[[str, str], bool]
    priority: Tuple[str, ...]
    exclude: Tuple[str, ...] = ()


def _has(text: str, *cues: str) -> bool:
    return any(cue in text for cue in cues)


PRIORITY_RULES: List[PriorityRule] = [
    PriorityRule(
        name="Hypermetabolic picture",
        trigger=lambda s, t: (
            "weight loss" in s
            and _has(s, "heat", "sweating")
            and _has(s, "palpitation", "heart")
        ),
        priority=("Hyperthyroidism", "Graves' Disease", "Pheochromocytoma"),
        exclude=("Vitamin B12 Deficiency", "Iron Deficiency Anemia"),
    ),
    PriorityRule(
        name="Polyuria / polydipsia with weight loss",
        trigger=lambda s, t: (
            _has(s, "frequent urination", "excessive thirst") and "weight loss" in s
        ),
        priority=("Diabetes Mellitus Type 2", "Hyperthyroidism"),
    ),
    PriorityRule(
        name="Triggered palpitations with tremor",
        trigger=lambda s, t: (
            "palpitation" in s
            and _has(t, "stress", "exertion", "trigger")
            and _has(s, "tremor", "shaking")
        ),
        priority=(
            "Pheochromocytoma",
            "Hyperthyroidism",
            "POTS (Postural Orthostatic Tachycardia Syndrome)",
            "Autonomic Dysfunction",
        ),
        exclude=("Vitamin B12 Deficiency",),
    ),
    PriorityRule(
        name="Sensory/motor symptoms with dizziness",
        trigger=lambda s, t: (
            _has(s, "numbness", "tingling", "weakness") and _has(s, "dizziness", "orthostatic")
        ),
        priority=(
            "Multiple Sclerosis (MS)",
            "POTS (Postural Orthostatic Tachycardia Syndrome)",
            "Autonomic Dysfunction",
            "Guillain-Barré Syndrome (GBS)",
        ),
    ),
]

PRIORITY_BOOST = 1.3


def evaluate_priority_rules(
    symptom_text: str,
    text: Optional[str] = None,
) -> Tuple[List[str], List[str]]:
    """
    Symptom cues are read from the reported symptoms only; the trigger
    cue (stress, exertion) may also come from the answers.

    Returns:
        (priority condition names, excluded condition names), each in
        first-triggered order; a prioritised condition is never excluded
    """
    priority: List[str] = []
    excluded: List[str] = []
    for rule in PRIORITY_RULES:
        if not rule.trigger(symptom_text, symptom_text if text is None else text):
            continue
        logger.debug(f"Priority rule triggered: {rule.name}")
        priority.extend(n for n in rule.priority if n not in priority)
        excluded.extend(n for n in rule.exclude if n not in excluded)
    excluded = [n for n in excluded if n not in priority]
    return priority, excluded


# ===== DEMOGRAPHICS =====

# (condition, minimum typical onset age, compatibility below that age)
DEMOGRAPHIC_RULES: List[Tuple[str, int, float]] = [
    ("Adult-Onset Still's Disease (AOSD)", 16, 0.3),
    ("Multiple Sclerosis (MS)", 20, 0.5),
    ("Diabetes Mellitus Type 2", 10, 0.5),
]


def parse_age(profile: Optional[Mapping[str, Any]]) -> Optional[int]:
    """First integer in profile['age'], None when missing or unparseable."""
    if not profile:
        return None
    age = profile.get("age")
    if age is None:
        return None
    match = re.search(r"\d+", str(age))
    return int(match.group()) if match else None


def demographic_compatibility(condition_name: str, age: Optional[int]) -> float:
    if age is None:
        return 1.0
    for name, min_age, compatibility in DEMOGRAPHIC_RULES:
        if condition_name == name and age < min_age:
            return compatibility
    return 1.0


def normalize_multiplier(multiplier: float) -> float:
    """Map a multiplier on 0..2 onto 0..1 (1.0 -> 0.5)."""
    return min(max(multiplier, 0.0), 2.0) / 2.0


# ===== STRATEGIES =====

class ScoringStrategy(ABC):
    """Composes per-condition raw scores from the extracted signals."""

    name: str = ""
    match_threshold: float = SIMPLE_MATCH_THRESHOLD

    def candidates(
        self,
        context: SignalContext,
        database: Tuple[DiseaseEntry, ...] = DISEASE_DATABASE,
    ) -> List[ConditionMatch]:
        return score_relevance(list(context.symptoms), self.match_threshold, database)

    @abstractmethod
    def score(
        self,
        context: SignalContext,
        database: Tuple[DiseaseEntry, ...] = DISEASE_DATABASE,
    ) -> List[ScoredCondition]:
        """Raw scores for retained conditions, in declaration order."""
        pass


class SimpleScoringStrategy(ScoringStrategy):
    """Weighted symptom sum with priority boosts."""

    name = "simple"
    match_threshold = SIMPLE_MATCH_THRESHOLD

    def score(self, context, database=DISEASE_DATABASE):
        priority, _ = evaluate_priority_rules(context.symptom_text, context.text)
        scored = []
        for match in self.candidates(context, database):
            total = match.raw_score
            if match.name in priority:
                total *= PRIORITY_BOOST
            scored.append(ScoredCondition(
                disease=match.disease,
                score=total,
                matched_symptoms=match.matched_symptoms,
                components={"relevance": round(match.raw_score, 4)},
            ))
        return scored


class AdvancedScoringStrategy(ScoringStrategy):
    """Multi-factor composition over all extracted signals."""

    name = "advanced"
    match_threshold = ADVANCED_MATCH_THRESHOLD

    WEIGHTS = {
        "cluster_match": 0.40,
        "system_overlap": 0.20,
        "time_course": 0.15,
        "pattern": 0.10,
        "demographic": 0.10,
        "red_flag": 0.05,
    }

    def score(self, context, database=DISEASE_DATABASE):
        priority, excluded = evaluate_priority_rules(context.symptom_text, context.text)
        involved = list(context.involved_systems)
        n_symptoms = len(context.symptoms)
        scored = []

        for match in self.candidates(context, database):
            name = match.name
            if name in excluded:
                logger.debug(f"Excluded by priority rule: {name}")
                continue

            denominator = max(n_symptoms, match.disease.expected_symptom_count)
            components = {
                "cluster_match": (match.raw_score / denominator) * match.match_ratio,
                "system_overlap": system_overlap(name, involved) * multi_system_boost(name, involved),
                "time_course": normalize_multiplier(time_course_multiplier(name, context.time_course)),
                "pattern": normalize_multiplier(pattern_multiplier(name, list(context.patterns))),
                "demographic": demographic_compatibility(name, context.age),
                "red_flag": normalize_multiplier(red_flag_multiplier(name, context.red_flags.multipliers)),
            }
            total = sum(self.WEIGHTS[k] * v for k, v in components.items())
            if name in priority:
                total *= PRIORITY_BOOST

            scored.append(ScoredCondition(
                disease=match.disease,
                score=total,
                matched_symptoms=match.matched_symptoms,
                components={k: round(v, 4) for k, v in components.items()},
            ))

        return scored


SCORING_STRATEGIES = {
    AdvancedScoringStrategy.name: AdvancedScoringStrategy,
    SimpleScoringStrategy.name: SimpleScoringStrategy,
}


def get_scoring_strategy(mode: str = "advanced") -> ScoringStrategy:
    """
    Get a scoring strategy by mode name.

    Args:
        mode: "advanced" or "simple"
    """
    try:
        return SCORING_STRATEGIES[mode]()
    except KeyError:
        raise ValueError(f"Unknown scoring mode: {mode}")
