"""
Symptom Likelihood Engine
=========================

Deterministic symptom-to-condition likelihood pipeline.

Pipeline:
    normalize symptoms
      -> independent signal extractors (pure functions):
         relevance, clusters, body systems, red flags, patterns, time course
      -> score composer (advanced multi-factor or simple weighted sum)
      -> normalization & display policy (5% floor, never 0%, dynamic top-N)
      -> ranked ConditionResults

Features:
- No network calls, no persistence, no randomness
- Identical input always gives identical output
- Optional explanation collaborator with a fixed template fallback
- Red flags with urgent emergency detection
- Time course that always resolves to a concrete pattern

NOT a diagnostic system - provides a preliminary, explainable ranking only.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..medical_data.cluster_map import ClusterTag
from ..medical_data.disease_database import (
    DiseaseEntry,
    DISEASE_DATABASE,
    get_disease,
    validate_disease_database,
)
from ..safety_config import SAFETY_NOTICE
from .symptom_normalizer import split_symptoms, normalize_token, combined_text
from .cluster_classifier import ClusterScore, classify_clusters, dominant_clusters
from .system_analyzer import SystemInvolvement, analyze_systems
from .red_flags import RedFlag, detect_red_flags
from .pattern_detection import PatternMatch, detect_patterns
from .time_course import TimeCourseData, infer_time_course, extract_duration
from .scoring import SignalContext, ScoringStrategy, get_scoring_strategy, parse_age
from .display_policy import apply_display_policy
from .explainability import ExplainabilityEngine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# (condition_name, matched_symptoms, likelihood) -> explanation text
ExplanationFn = Callable[[str, List[str], float], str]


class ScoringMode(str, Enum):
    ADVANCED = "advanced"
    SIMPLE = "simple"


@dataclass(frozen=True)
class ConditionResult:
    condition: str
    likelihood: float
    display_text: str
    description: str
    external_reference_term: str
    clusters: Tuple[ClusterTag, ...]
    explanation: str
    matched_symptoms: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "condition": self.condition,
            "likelihood": round(self.likelihood, 4),
            "display_text": self.display_text,
            "description": self.description,
            "external_reference_term": self.external_reference_term,
            "clusters": [c.value for c in self.clusters],
            "explanation": self.explanation,
            "matched_symptoms": list(self.matched_symptoms),
        }


@dataclass(frozen=True)
class AnalysisResult:
    conditions: Tuple[ConditionResult, ...]
    dominant_clusters: Tuple[ClusterTag, ...]
    red_flags: Tuple[RedFlag, ...]
    time_course: TimeCourseData
    close_call_label: Optional[str] = None
    mode: str = ScoringMode.ADVANCED.value
    system_involvement: Tuple[SystemInvolvement, ...] = field(default_factory=tuple)
    cluster_scores: Tuple[ClusterScore, ...] = field(default_factory=tuple)
    patterns: Tuple[PatternMatch, ...] = field(default_factory=tuple)
    safety_notice: str = SAFETY_NOTICE

    @property
    def urgent(self) -> bool:
        return any(flag.urgent for flag in self.red_flags)

    def with_explanations(self, explanations: Mapping[str, str]) -> "AnalysisResult":
        """Copy with explanations replaced, keyed by condition name."""
        conditions = tuple(
            replace(c, explanation=explanations.get(c.condition, c.explanation))
            for c in self.conditions
        )
        return replace(self, conditions=conditions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "conditions": [c.to_dict() for c in self.conditions],
            "dominant_clusters": [c.value for c in self.dominant_clusters],
            "cluster_scores": {cs.cluster.value: round(cs.score, 4) for cs in self.cluster_scores},
            "system_involvement": [si.to_dict() for si in self.system_involvement],
            "red_flags": [f.to_dict() for f in self.red_flags],
            "urgent": self.urgent,
            "patterns": [p.to_dict() for p in self.patterns],
            "time_course": self.time_course.to_dict(),
            "close_call_label": self.close_call_label,
            "safety_notice": self.safety_notice,
        }


class LikelihoodEngine:
    """
    Ranks reference conditions for a set of reported symptoms.

    Stateless between calls: reference tables are read-only and every
    request recomputes all signals, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        mode: Union[str, ScoringMode] = ScoringMode.ADVANCED,
        explainer: Optional[ExplanationFn] = None,
        database: Tuple[DiseaseEntry, ...] = DISEASE_DATABASE
    ):
        """
        Initialize the engine.

        Args:
            mode: "advanced" (multi-factor) or "simple" (weighted sum)
            explainer: Optional explanation collaborator; failures fall
                back to the template explanation
            database: Reference conditions

        Raises:
            ReferenceDataError: if the reference table is malformed
        """
        validate_disease_database(database)

        self.mode = ScoringMode(mode)
        self.strategy: ScoringStrategy = get_scoring_strategy(self.mode.value)
        self.explainer = explainer
        self.database = database
        self.explainability = ExplainabilityEngine()

        logger.info(f"LikelihoodEngine ready: mode={self.mode.value}, conditions={len(database)}")

    def extract_symptoms(self, text: str) -> Dict[str, Any]:
        """
        Split free text into symptom tokens.

        Returns:
            {"symptoms": [...], "duration_days": int or None}
        """
        return {
            "symptoms": [normalize_token(s) for s in split_symptoms(text)],
            "duration_days": extract_duration(text or ""),
        }

    def analyze(
        self,
        symptoms: Union[str, Iterable[str], None],
        answers: Optional[List[str]] = None,
        profile: Optional[Mapping[str, Any]] = None
    ) -> AnalysisResult:
        """
        Run the full pipeline.

        Args:
            symptoms: Delimited free text or a list of symptom strings
            answers: Free-text answers to follow-up questions
            profile: Optional {"age": str, "gender": str}

        Returns:
            AnalysisResult with ranked conditions and auxiliary signals
        """
        display_tokens = split_symptoms(symptoms)
        tokens = [normalize_token(s) for s in display_tokens]
        display_names = {}
        for token, shown in zip(tokens, display_tokens):
            display_names.setdefault(token, shown)

        answers = list(answers or [])
        text = combined_text(tokens, answers)

        logger.info(f"Analyzing {len(tokens)} symptoms, {len(answers)} answers (mode={self.mode.value})")

        # ===== SIGNAL EXTRACTION =====
        cluster_scores = classify_clusters(tokens)
        dominant = dominant_clusters(cluster_scores)
        systems = analyze_systems(tokens)
        red_flag_report = detect_red_flags(text)
        patterns = detect_patterns(text)
        time_course = infer_time_course(text)

        context = SignalContext(
            symptoms=tuple(tokens),
            text=text,
            symptom_text=", ".join(tokens),
            time_course=time_course,
            red_flags=red_flag_report,
            patterns=tuple(patterns),
            involved_systems=tuple(si.system for si in systems),
            age=parse_age(profile),
        )

        # ===== COMPOSITION & DISPLAY =====
        scored = self.strategy.score(context, self.database)
        by_name = {s.name: s for s in scored}
        selection = apply_display_policy([(s.name, s.score) for s in scored])

        conditions = []
        for entry in selection.entries:
            disease = get_disease(entry.key) or by_name[entry.key].disease
            matched = [display_names.get(s, s) for s in by_name[entry.key].matched_symptoms]
            conditions.append(ConditionResult(
                condition=disease.name,
                likelihood=entry.likelihood,
                display_text=entry.display_text,
                description=disease.description,
                external_reference_term=disease.external_reference_term,
                clusters=disease.clusters,
                explanation=self._explain(disease.name, matched, entry.likelihood),
                matched_symptoms=tuple(matched),
            ))

        logger.info(
            f"Surfaced {len(conditions)} of {len(scored)} retained conditions"
            + (f" ({selection.close_call_label})" if selection.close_call_label else "")
        )

        return AnalysisResult(
            conditions=tuple(conditions),
            dominant_clusters=tuple(dominant),
            red_flags=red_flag_report.flags,
            time_course=time_course,
            close_call_label=selection.close_call_label,
            mode=self.mode.value,
            system_involvement=tuple(systems),
            cluster_scores=tuple(cluster_scores),
            patterns=tuple(patterns),
        )

    def _explain(self, condition_name: str, matched: List[str], likelihood: float) -> str:
        if self.explainer is not None:
            try:
                text = self.explainer(condition_name, matched, likelihood)
                if text and text.strip():
                    return text.strip()
                logger.warning(f"Empty explanation for {condition_name}, using template")
            except Exception as e:
                logger.warning(f"Explanation collaborator failed for {condition_name}: {e}")
        return self.explainability.template_explanation(condition_name, matched, likelihood)
