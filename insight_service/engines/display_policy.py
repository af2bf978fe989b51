"""
Normalizer & Display Policy

Raw scores -> what the user sees:
1. divide by the batch maximum
2. drop zeros (never show 0%), raise anything below 5% to 5%
3. sort descending, ties kept in declaration order
4. show top 3 when the best score is weak or the top two are a close
   call, otherwise top 5
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

LIKELIHOOD_FLOOR = 0.05
LOW_LIKELIHOOD_THRESHOLD = 0.10
LOW_LIKELIHOOD_TEXT = "Low likelihood (<10%)"

WEAK_TOP_SCORE = 0.40
CLOSE_CALL_GAP = 0.10
CLOSE_CALL_LABEL = "Close call — consider more information"
TOP_N_NARROW = 3
TOP_N_WIDE = 5


@dataclass(frozen=True)
class DisplayEntry:
    key: str
    likelihood: float
    display_text: str


@dataclass(frozen=True)
class DisplaySelection:
    entries: Tuple[DisplayEntry, ...] = field(default_factory=tuple)
    close_call_label: Optional[str] = None


def normalize_scores(scores: List[Tuple[str, float]]) -> List[Tuple[str, float]]:
    """Divide every score by the batch max; an all-zero batch is left as is."""
    if not scores:
        return []
    top = max(score for _, score in scores)
    if top <= 0:
        return list(scores)
    return [(key, score / top) for key, score in scores]


def clamp_likelihood(score: float) -> Optional[float]:
    """None for non-positive scores, otherwise at least the display floor."""
    if score <= 0:
        return None
    return min(max(score, LIKELIHOOD_FLOOR), 1.0)


def format_likelihood(likelihood: float) -> str:
    if likelihood < LOW_LIKELIHOOD_THRESHOLD:
        return LOW_LIKELIHOOD_TEXT
    # Half-up rounding, so 12.5 shows as 13%
    return f"{int(math.floor(likelihood * 100 + 0.5))}%"


def select_top_n(likelihoods: List[float]) -> Tuple[int, Optional[str]]:
    """
    How many ranked conditions to show.

    Args:
        likelihoods: Sorted descending

    Returns:
        (count, close-call label or None)
    """
    if not likelihoods:
        return 0, None

    if len(likelihoods) >= 2 and likelihoods[0] - likelihoods[1] < CLOSE_CALL_GAP:
        return TOP_N_NARROW, CLOSE_CALL_LABEL

    if likelihoods[0] < WEAK_TOP_SCORE:
        return TOP_N_NARROW, None
    return TOP_N_WIDE, None


def apply_display_policy(raw_scores: List[Tuple[str, float]]) -> DisplaySelection:
    """
    Run the full display pipeline.

    Args:
        raw_scores: (condition name, raw score) in declaration order

    Returns:
        DisplaySelection with the surfaced entries and optional label
    """
    clamped = []
    for key, score in normalize_scores(raw_scores):
        likelihood = clamp_likelihood(score)
        if likelihood is not None:
            clamped.append((key, likelihood))

    # sorted() is stable: ties keep declaration order
    ranked = sorted(clamped, key=lambda item: item[1], reverse=True)
    count, label = select_top_n([likelihood for _, likelihood in ranked])

    entries = tuple(
        DisplayEntry(key=key, likelihood=likelihood, display_text=format_likelihood(likelihood))
        for key, likelihood in ranked[:count]
    )
    return DisplaySelection(entries=entries, close_call_label=label)
