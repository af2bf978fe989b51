"""
Red-Flag Detector
=================

Textual rules over the combined symptom + answer text that signal
elevated risk. Each rule yields a named RedFlag and bumps one or more
risk-category multipliers.

Multipliers start at 1.0 and accumulate additively per category
(e.g. malignancy += 1.5). When applied to a condition, every category
that covers the condition multiplies in.

Urgent flags (emergency presentations) carry urgent=True and an action
telling the user to seek care; they do not change condition scores.
"""

import re
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple

from ..safety_config import EMERGENCY_SYMPTOMS
from .time_course import nearest_duration

logger = logging.getLogger(__name__)


# ===== DATA TYPES =====

@dataclass(frozen=True)
class RedFlag:
    name: str
    detected: bool = True
    severity: float = 0.0
    urgent: bool = False
    action: str = ""

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class RedFlagMultipliers:
    """One multiplier (>= 1.0) per risk category."""
    malignancy: float = 1.0
    chronic_infection: float = 1.0
    ms: float = 1.0
    dysautonomia: float = 1.0
    adrenal_insufficiency: float = 1.0
    autoimmune: float = 1.0

    def to_dict(self) -> Dict[str, float]:
        return {k: round(v, 4) for k, v in asdict(self).items()}


@dataclass(frozen=True)
class RedFlagReport:
    flags: Tuple[RedFlag, ...] = field(default_factory=tuple)
    multipliers: RedFlagMultipliers = field(default_factory=RedFlagMultipliers)

    @property
    def urgent(self) -> bool:
        return any(f.urgent for f in self.flags)


# ===== RULE CONSTANTS =====

POUNDS_TO_KG = 0.453592
SIGNIFICANT_WEIGHT_LOSS_KG = 2.0
CLAUSE_END = re.compile(r"[,;.\n]")
WEIGHT_LOSS_WINDOW_DAYS = 60        # ~2 months
ASSUMED_SIGNIFICANT_LOSS_KG = 3.0   # "significant" / "unintentional" with no number

_WEIGHT_UNIT = r"(kg|kilograms?|pounds?|lbs?)"
WEIGHT_LOSS_PATTERNS = [
    re.compile(r"(?:lost|losing)\s+(\d+(?:\.\d+)?)\s*" + _WEIGHT_UNIT),
    re.compile(r"weight\s+loss\s+of\s+(\d+(?:\.\d+)?)\s*" + _WEIGHT_UNIT),
    re.compile(r"(\d+(?:\.\d+)?)\s*" + _WEIGHT_UNIT + r"\s+(?:of\s+)?(?:weight\s+)?loss"),
]

WEIGHT_LOSS_CUES = ["weight loss", "lost weight", "losing weight"]
SIGNIFICANT_WEIGHT_LOSS_CUES = [
    "significant weight loss",
    "a lot of weight",
    "unintentional weight loss",
    "unexplained weight loss",
]
NIGHT_SWEAT_CUES = ["night sweat", "sweating at night", "drenching sweat", "soaked at night"]
NEURO_CUES = ["numbness", "tingling", "weakness", "balance problem"]
VISUAL_CUES = ["vision", "blurred", "double vision", "visual"]
SYNCOPE_CUES = ["syncope", "fainting", "fainted", "passed out"]

ACTION_EMERGENCY = "Seek emergency medical care immediately."
ACTION_PROMPT = "Arrange a prompt medical evaluation."
ACTION_REVIEW = "Discuss these symptoms with a doctor soon."

# Risk category -> conditions it boosts
RED_FLAG_CONDITIONS: Dict[str, List[str]] = {
    "malignancy": ["Lymphoma"],
    "chronic_infection": [
        "Chronic EBV Infection",
        "Chronic CMV Infection",
        "Tuberculosis (TB)",
    ],
    "ms": ["Multiple Sclerosis (MS)"],
    "dysautonomia": [
        "POTS (Postural Orthostatic Tachycardia Syndrome)",
        "Autonomic Dysfunction",
    ],
    "adrenal_insufficiency": ["Adrenal Insufficiency"],
    "autoimmune": [
        "Systemic Lupus Erythematosus (SLE)",
        "Rheumatoid Arthritis",
        "Adult-Onset Still's Disease (AOSD)",
        "Sjögren's Syndrome",
        "Systemic Vasculitis",
        "Sarcoidosis",
    ],
}


def _any(text: str, cues: List[str]) -> bool:
    return any(cue in text for cue in cues)


def _weight_loss_statement(text: str) -> Optional[Tuple[float, int]]:
    """(kg lost, end offset of the statement) or None."""
    for pattern in WEIGHT_LOSS_PATTERNS:
        match = pattern.search(text)
        if match:
            amount = float(match.group(1))
            unit = match.group(2)
            if unit.startswith("lb") or unit.startswith("pound"):
                amount *= POUNDS_TO_KG
            return amount, match.end()

    for cue in SIGNIFICANT_WEIGHT_LOSS_CUES:
        start = text.find(cue)
        if start >= 0:
            return ASSUMED_SIGNIFICANT_LOSS_KG, start + len(cue)
    return None


def weight_loss_kg(text: str) -> Optional[float]:
    """
    Amount of weight loss stated in the text, in kg.

    Returns:
        kg lost, an assumed 3 kg for "significant" wording, or None
    """
    statement = _weight_loss_statement(text)
    return statement[0] if statement else None


def weight_loss_window(text: str) -> Optional[int]:
    """
    Days over which the weight was lost, read from the clause that
    follows the weight-loss statement. None when no period is given.
    """
    statement = _weight_loss_statement(text)
    if statement is None:
        return None
    clause = CLAUSE_END.split(text[statement[1]:], maxsplit=1)[0]
    return nearest_duration(clause)


def _is_orthostatic(text: str) -> bool:
    if "orthostatic" in text:
        return True
    if "dizziness" in text and "standing" in text:
        return True
    return "dizzy" in text and bool(re.search(r"\bstand|\bup\b", text))


def detect_red_flags(text: str) -> RedFlagReport:
    """
    Run every red-flag rule over the combined text.

    Args:
        text: Lowercased symptoms + answers

    Returns:
        RedFlagReport with detected flags and category multipliers
    """
    text = text.lower()
    flags: List[RedFlag] = []
    boosts = {name: 1.0 for name in RED_FLAG_CONDITIONS}

    has_neuro = _any(text, NEURO_CUES)
    has_night_sweats = _any(text, NIGHT_SWEAT_CUES)
    has_weight_loss = _any(text, WEIGHT_LOSS_CUES)

    # --- Significant weight loss (>= 2 kg within ~2 months) ---
    kg = weight_loss_kg(text)
    if kg is not None:
        has_weight_loss = True
        duration = weight_loss_window(text)
        recent = duration is None or duration <= WEIGHT_LOSS_WINDOW_DAYS
        if kg >= SIGNIFICANT_WEIGHT_LOSS_KG and recent:
            flags.append(RedFlag(
                name="Significant Weight Loss",
                severity=min(kg / 5.0, 1.0),
                action=ACTION_PROMPT,
            ))
            boosts["malignancy"] += 1.5

    # --- Night sweats ---
    if has_night_sweats:
        flags.append(RedFlag(name="Night Sweats", severity=0.8, action=ACTION_REVIEW))
        boosts["malignancy"] += 1.4
        boosts["chronic_infection"] += 1.4

    # --- Neurological + visual ---
    if has_neuro and _any(text, VISUAL_CUES):
        flags.append(RedFlag(
            name="Neurological + Visual Symptoms",
            severity=0.9,
            action=ACTION_REVIEW,
        ))
        boosts["ms"] += 1.6

    # --- Orthostatic dizziness ---
    if _is_orthostatic(text):
        flags.append(RedFlag(name="Orthostatic Dizziness", severity=0.7, action=ACTION_REVIEW))
        boosts["dysautonomia"] += 1.4
        boosts["adrenal_insufficiency"] += 1.3
        if has_neuro:
            boosts["dysautonomia"] += 0.3
            boosts["adrenal_insufficiency"] += 0.2

    # --- Systemic inflammatory triad ---
    if "fever" in text and "rash" in text and "joint" in text:
        flags.append(RedFlag(
            name="Fever with Rash and Joint Pain",
            severity=0.7,
            action=ACTION_REVIEW,
        ))
        boosts["autoimmune"] += 1.3

    # ===== URGENT =====
    if "chest pain" in text and (
        _any(text, SYNCOPE_CUES) or ("severe" in text and "breath" in text)
    ):
        flags.append(RedFlag(
            name="Chest Pain with Syncope or Severe Breathing Difficulty",
            severity=1.0,
            urgent=True,
            action=ACTION_EMERGENCY,
        ))

    if has_weight_loss and has_night_sweats:
        flags.append(RedFlag(
            name="Unintentional Weight Loss with Night Sweats",
            severity=0.9,
            urgent=True,
            action=ACTION_PROMPT,
        ))

    for phrase in EMERGENCY_SYMPTOMS:
        if phrase in text:
            flags.append(RedFlag(
                name=f"Emergency Symptom: {phrase}",
                severity=1.0,
                urgent=True,
                action=ACTION_EMERGENCY,
            ))

    if flags:
        logger.info(f"Red flags detected: {[f.name for f in flags]}")

    return RedFlagReport(
        flags=tuple(flags),
        multipliers=RedFlagMultipliers(**boosts),
    )


def red_flag_multiplier(condition_name: str, multipliers: RedFlagMultipliers) -> float:
    """Product of every risk-category multiplier that covers the condition."""
    result = 1.0
    for category, conditions in RED_FLAG_CONDITIONS.items():
        if condition_name in conditions:
            result *= getattr(multipliers, category)
    return result
