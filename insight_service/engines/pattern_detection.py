"""
Pattern Detector

Recognises classic symptom combinations and boosts the conditions they
point at. Multipliers from several patterns combine multiplicatively.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternMatch:
    pattern_name: str
    detected: bool
    affected_conditions: Tuple[str, ...] = field(default_factory=tuple)
    multiplier: float = 1.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "pattern_name": self.pattern_name,
            "detected": self.detected,
            "affected_conditions": list(self.affected_conditions),
            "multiplier": self.multiplier,
        }


def _has(text: str, *cues: str) -> bool:
    return any(cue in text for cue in cues)


def _migratory_joint_rash(text: str) -> bool:
    migratory = "migratory joint" in text or (
        "joint pain" in text and _has(text, "moving", "different joints")
    )
    transient = "transient rash" in text or (
        "rash" in text and _has(text, "comes and goes", "appears and disappears")
    )
    return migratory and transient


def _neuro_visual(text: str) -> bool:
    neuro = _has(text, "numbness", "tingling", "weakness", "balance problem")
    visual = _has(text, "vision problem", "blurred vision", "double vision", "visual change")
    return neuro and visual


def _weight_loss_night_sweats(text: str) -> bool:
    weight_loss = _has(text, "weight loss", "lost weight", "losing weight")
    night_sweats = _has(text, "night sweat", "sweating at night")
    return weight_loss and night_sweats


def _orthostatic_numbness(text: str) -> bool:
    orthostatic = "orthostatic" in text or ("dizziness" in text and "standing" in text)
    return orthostatic and _has(text, "numbness", "tingling")


# (name, rule, affected conditions, multiplier)
PATTERN_RULES: List[Tuple[str, Callable[[str], bool], Tuple[str, ...], float]] = [
    (
        "Migratory Joint Pain + Transient Rash",
        _migratory_joint_rash,
        (
            "Systemic Lupus Erythematosus (SLE)",
            "Systemic Vasculitis",
            "Adult-Onset Still's Disease (AOSD)",
        ),
        1.5,
    ),
    (
        "Neurological + Visual Symptoms",
        _neuro_visual,
        ("Multiple Sclerosis (MS)", "Sjögren's Syndrome"),
        1.4,
    ),
    (
        "Weight Loss + Night Sweats",
        _weight_loss_night_sweats,
        (
            "Lymphoma",
            "Chronic EBV Infection",
            "Chronic CMV Infection",
            "Tuberculosis (TB)",
        ),
        1.6,
    ),
    (
        "Orthostatic Dizziness + Numbness",
        _orthostatic_numbness,
        (
            "POTS (Postural Orthostatic Tachycardia Syndrome)",
            "Autonomic Dysfunction",
            "Adrenal Insufficiency",
        ),
        1.5,
    ),
]


def detect_patterns(text: str) -> List[PatternMatch]:
    """
    Evaluate every pattern rule.

    Returns:
        Only the detected patterns, in rule order
    """
    text = text.lower()
    matches = []
    for name, rule, conditions, multiplier in PATTERN_RULES:
        if rule(text):
            matches.append(PatternMatch(
                pattern_name=name,
                detected=True,
                affected_conditions=conditions,
                multiplier=multiplier,
            ))

    if matches:
        logger.debug(f"Patterns detected: {[m.pattern_name for m in matches]}")
    return matches


def pattern_multiplier(condition_name: str, patterns: List[PatternMatch]) -> float:
    result = 1.0
    for match in patterns:
        if match.detected and condition_name in match.affected_conditions:
            result *= match.multiplier
    return result
