"""
Time-Course Inferencer
======================

Works out how long symptoms have been present and how they behave over
time, then turns that into a per-condition multiplier.

Order of evidence:
1. Explicit duration ("for 3 weeks", "2 months") and explicit pattern
   keywords ("comes and goes", "getting worse") from the text
2. Otherwise, symptom-specific inference (e.g. unexplained weight loss
   is usually chronic), marked derived=True
3. Otherwise chronic / 30 days, derived=True

The inferencer never ends on UNKNOWN and always produces a readable
interpretation.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TimePattern(str, Enum):
    ACUTE = "acute"
    RELAPSING = "relapsing"
    PROGRESSIVE = "progressive"
    CHRONIC = "chronic"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TimeCourseData:
    duration_days: Optional[int]
    pattern: TimePattern
    derived: bool
    interpretation: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "duration_days": self.duration_days,
            "pattern": self.pattern.value,
            "derived": self.derived,
            "interpretation": self.interpretation,
        }


# ===== DURATION EXTRACTION =====

_UNIT = r"(days?|d|weeks?|wks?|w|months?|mos?|years?|yrs?|y)"
# "25 years old" is an age, not a duration
_NOT_AGE = r"(?![\s-]*(?:old|of\s+age)\b)"

# Prefixed phrases are tried first: "over 2 months" beats a stray "3 d"
DURATION_PATTERNS = [
    re.compile(
        r"\b(?:for|since|over|last|past)\s+(?:the\s+)?(?:last\s+|past\s+)?"
        r"(\d+)\s*" + _UNIT + r"\b" + _NOT_AGE
    ),
    re.compile(r"\b(\d+)\s*" + _UNIT + r"\b" + _NOT_AGE),
]

UNIT_DAYS = {
    "d": 1,
    "w": 7,
    "m": 30,
    "y": 365,
}

ACUTE_MAX_DAYS = 14
CHRONIC_MIN_DAYS = 90


def extract_duration(text: str) -> Optional[int]:
    """
    Pull an explicit duration in days out of free text.

    Returns:
        Days, or None when no duration is stated
    """
    text = text.lower()
    for pattern in DURATION_PATTERNS:
        match = pattern.search(text)
        if match:
            value = int(match.group(1))
            unit = match.group(2)
            return value * UNIT_DAYS[unit[0]]
    return None


def nearest_duration(text: str) -> Optional[int]:
    """Duration in days of the first quantity in the text, prefixed or not."""
    match = DURATION_PATTERNS[-1].search(text.lower())
    if match is None:
        return None
    return int(match.group(1)) * UNIT_DAYS[match.group(2)[0]]


# ===== PATTERN KEYWORDS =====

RELAPSING_CUES = ["relapsing", "comes and goes", "waxing", "waning", "on and off", "episodic"]
PROGRESSIVE_CUES = ["progressive", "getting worse", "worsening", "gradually worse"]
CHRONIC_CUES = ["chronic", "long-term", "long term", "persistent"]
ACUTE_CUES = ["sudden", "acute"]


def _any(text: str, cues: List[str]) -> bool:
    return any(cue in text for cue in cues)


def detect_explicit_pattern(text: str, duration_days: Optional[int]) -> TimePattern:
    if _any(text, RELAPSING_CUES):
        return TimePattern.RELAPSING
    if _any(text, PROGRESSIVE_CUES):
        return TimePattern.PROGRESSIVE
    if _any(text, CHRONIC_CUES) or (duration_days is not None and duration_days > CHRONIC_MIN_DAYS):
        return TimePattern.CHRONIC
    if _any(text, ACUTE_CUES) or (duration_days and duration_days <= ACUTE_MAX_DAYS):
        return TimePattern.ACUTE
    if duration_days is not None:
        # Stated duration between two weeks and three months
        return TimePattern.CHRONIC
    return TimePattern.UNKNOWN


def infer_from_symptoms(text: str) -> Tuple[TimePattern, int]:
    """Symptom-semantic guess when the text states no timing at all."""
    if "weight loss" in text:
        return TimePattern.CHRONIC, 21

    if ("palpitation" in text or "heart" in text) and _any(text, ["worse", "increas", "frequent"]):
        return TimePattern.PROGRESSIVE, 30

    if ("tremor" in text or "shaking" in text) and _any(text, ["anxiety", "nervous", "panic"]):
        return TimePattern.CHRONIC, 60

    if _any(text, ["numbness", "tingling", "weakness", "vision problem", "vision change"]):
        if "worse" in text or "progress" in text:
            return TimePattern.PROGRESSIVE, 45
        return TimePattern.CHRONIC, 45

    return TimePattern.CHRONIC, 30


# ===== INTERPRETATION =====

PATTERN_SENTENCES = {
    TimePattern.RELAPSING: "Relapsing pattern suggests an autoimmune or episodic condition.",
    TimePattern.PROGRESSIVE: "Progressive pattern suggests a neurologic or degenerative condition.",
    TimePattern.CHRONIC: "Chronic pattern suggests a long-standing condition.",
    TimePattern.ACUTE: "Acute pattern suggests a recent-onset condition.",
}

FALLBACK_INTERPRETATION = (
    "Symptom pattern suggests a chronic condition. "
    "More specific timing information would improve accuracy."
)


def _duration_sentence(days: int) -> str:
    if days > 90:
        return "Symptoms have been present for over 3 months, suggesting a chronic condition."
    if days > 21:
        return "Symptoms lasting over 3 weeks suggest a chronic rather than acute condition."
    if days > 14:
        return "Symptoms lasting over 2 weeks suggest a chronic condition rather than an acute illness."
    return "Recent onset (within 2 weeks) may indicate an acute condition."


def interpret(duration_days: Optional[int], pattern: TimePattern, derived: bool) -> str:
    parts = []
    if duration_days is not None:
        parts.append(_duration_sentence(duration_days))
    if pattern in PATTERN_SENTENCES:
        parts.append(PATTERN_SENTENCES[pattern])

    if not parts:
        return FALLBACK_INTERPRETATION

    text = " ".join(parts)
    if derived:
        text = text[:-1] + " (inferred from symptom pattern)."
    return text


def infer_time_course(text: str) -> TimeCourseData:
    """
    Infer duration and temporal pattern from combined symptom/answer text.

    Args:
        text: Lowercased symptoms + answers

    Returns:
        TimeCourseData with a concrete (never UNKNOWN) pattern
    """
    text = text.lower()
    duration = extract_duration(text)
    pattern = detect_explicit_pattern(text, duration)
    derived = False

    if pattern == TimePattern.UNKNOWN:
        pattern, duration = infer_from_symptoms(text)
        derived = True

    interpretation = interpret(duration, pattern, derived)
    logger.debug(f"Time course: {duration} days, {pattern.value}, derived={derived}")

    return TimeCourseData(
        duration_days=duration,
        pattern=pattern,
        derived=derived,
        interpretation=interpretation,
    )


# ===== CONDITION MULTIPLIERS =====

ACUTE_CONDITIONS = [
    "Guillain-Barré Syndrome (GBS)",
]

CHRONIC_CONDITIONS = [
    "Systemic Lupus Erythematosus (SLE)",
    "Rheumatoid Arthritis",
    "Adult-Onset Still's Disease (AOSD)",
    "Sjögren's Syndrome",
    "Systemic Vasculitis",
    "Sarcoidosis",
    "Multiple Sclerosis (MS)",
    "Chronic EBV Infection",
    "Chronic CMV Infection",
    "Tuberculosis (TB)",
    "Lymphoma",
]

# Conditions whose course typically relapses and remits
RELAPSING_CONDITIONS = [
    "Systemic Lupus Erythematosus (SLE)",
    "Rheumatoid Arthritis",
    "Adult-Onset Still's Disease (AOSD)",
    "Sjögren's Syndrome",
    "Systemic Vasculitis",
    "Sarcoidosis",
    "Multiple Sclerosis (MS)",
]

PROGRESSIVE_CONDITIONS = [
    "Multiple Sclerosis (MS)",
    "Guillain-Barré Syndrome (GBS)",
]


def time_course_multiplier(condition_name: str, time_course: TimeCourseData) -> float:
    """Multiplicative fit of a condition to the observed time course (1.0 = neutral)."""
    multiplier = 1.0
    duration = time_course.duration_days

    if duration is not None and duration > ACUTE_MAX_DAYS:
        if condition_name in ACUTE_CONDITIONS:
            multiplier *= 0.5
        if condition_name in CHRONIC_CONDITIONS:
            multiplier *= 1.3
    elif duration and duration > 0:
        if condition_name in ACUTE_CONDITIONS:
            multiplier *= 1.2

    if time_course.pattern == TimePattern.RELAPSING and condition_name in RELAPSING_CONDITIONS:
        multiplier *= 1.4
    if time_course.pattern == TimePattern.PROGRESSIVE and condition_name in PROGRESSIVE_CONDITIONS:
        multiplier *= 1.3

    return multiplier
