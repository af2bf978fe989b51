"""
Symptom Normalizer
==================

Turns free text into discrete symptom tokens and resolves tokens against
reference tables.

Key matching rule (shared by every extractor):
1. exact key match
2. otherwise the first key, in table declaration order, that is a
   substring of the token or contains the token

The scan order is the dict insertion order of the reference table, so a
lookup always resolves to the same key for the same input.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple, TypeVar, Union

from ..medical_data.symptom_weights import (
    SYMPTOM_WEIGHTS,
    DEFAULT_SYMPTOM_WEIGHT,
)

V = TypeVar("V")

SYMPTOM_DELIMITERS = re.compile(r"[,;\n]")


def normalize_token(token: str) -> str:
    """Lowercase and trim a single token."""
    return token.strip().lower()


def split_symptoms(symptoms: Union[str, Iterable[str], None]) -> List[str]:
    """
    Split raw symptom input into trimmed, non-empty tokens.

    Accepts a delimited string (comma, semicolon, newline) or a list of
    already-committed strings; list items are split as well. Original
    casing is kept for display.
    """
    if not symptoms:
        return []

    if isinstance(symptoms, str):
        chunks = [symptoms]
    else:
        chunks = list(symptoms)

    tokens = []
    for chunk in chunks:
        for part in SYMPTOM_DELIMITERS.split(chunk or ""):
            part = part.strip()
            if part:
                tokens.append(part)
    return tokens


def normalize_symptoms(symptoms: Union[str, Iterable[str], None]) -> List[str]:
    """Split and lowercase symptom input for matching."""
    return [normalize_token(s) for s in split_symptoms(symptoms)]


def fuzzy_lookup(token: str, table: Mapping[str, V]) -> Optional[Tuple[str, V]]:
    """
    Resolve a token against a reference table.

    Args:
        token: Symptom token (any casing)
        table: Reference mapping keyed by lowercase symptom name

    Returns:
        (matched_key, value) or None when nothing matches
    """
    token = normalize_token(token)
    if not token:
        return None

    if token in table:
        return token, table[token]

    for key, value in table.items():
        if key in token or token in key:
            return key, value

    return None


def get_symptom_score(symptom: str) -> float:
    """severity x specificity for a symptom, (0.5, 0.3) when unknown."""
    match = fuzzy_lookup(symptom, SYMPTOM_WEIGHTS)
    weight = match[1] if match else DEFAULT_SYMPTOM_WEIGHT
    return weight.score


def combined_text(symptoms: List[str], answers: Optional[List[Any]] = None) -> str:
    """
    Lowercased symptom + answer text, the input of every textual rule.
    """
    parts = [", ".join(symptoms)]
    parts.extend(str(a) for a in (answers or []) if a is not None)
    return " ".join(parts).lower()
