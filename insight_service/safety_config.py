"""
Safety Configuration
====================

Safety protocols and content filters for the wellness insight service.

Core Principle:
    The service produces a preliminary, explainable ranking of conditions.
    It must NEVER diagnose, prescribe, or replace a doctor.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

# === 1. BLOCKED WORDS (generated text must not contain these) ===
UNSAFE_TERMS = [
    "diagnosed",
    "confirmed diagnosis",
    "confirm that you have",
    "you definitely have",
    "prescribe",
    "prescription",
    "dosage",
    "take [0-9]+ mg",
    "cure",
    "guaranteed recovery",
    "nothing to worry about",
    "treatment plan",
    "start taking",
]

# === 1.1 EMERGENCY SYMPTOMS (always urgent on their own) ===
EMERGENCY_SYMPTOMS = [
    "loss of consciousness",
    "passed out",
    "severe bleeding",
    "vomiting blood",
    "coughing up blood",
    "slurred speech",
    "sudden numbness",
    "vision loss",
    "choking",
    "suicidal thoughts",
    "overdose",
]

# === 2. EXPLANATION PROMPT ===
SYSTEM_PROMPT = """
You write short, plain-language explanations for a wellness summary.
You do NOT diagnose diseases.
You do NOT prescribe medication.
Explain in one or two sentences why the reported symptoms are associated
with the named condition. Always stay tentative ("may", "can be associated").
Do not use words like "diagnose", "confirm", "cure", or "prescribe".
"""

# === 3. DISCLAIMERS ===
SAFETY_NOTICE = (
    "Important: This is a preliminary wellness summary. It is not a medical "
    "diagnosis. Please consult a licensed healthcare professional for proper "
    "evaluation."
)

DISCLAIMER = (
    "This analysis is for informational purposes only and does not "
    "constitute medical diagnosis."
)

DISCLAIMER_HEADER = """
**DISCLAIMER: This summary ranks possible conditions for discussion with a clinician and is NOT a medical diagnosis.**
"""

DISCLAIMER_FOOTER = """
*Please consult a qualified healthcare professional for proper evaluation and treatment.*
"""


def safety_filter(text: str) -> Tuple[bool, Optional[str]]:
    """
    Check text for unsafe terms.

    Returns:
        (is_safe, error_message)
    """
    text_lower = text.lower()

    for term in UNSAFE_TERMS:
        if re.search(r"\b" + term + r"\b", text_lower):
            return False, f"Safety Violation: text contained blocked term '{term}'"

    return True, None


def format_safe_response(
    conditions: List[Dict[str, Any]],
    time_course: Optional[Dict[str, Any]] = None,
    red_flags: Optional[List[Dict[str, Any]]] = None,
    close_call_label: Optional[str] = None,
) -> str:
    """
    Format an analysis as a plain-text summary with mandatory disclaimers.
    """
    response_parts = [DISCLAIMER_HEADER]

    urgent = [f for f in (red_flags or []) if f.get("urgent")]
    if urgent:
        response_parts.append("**Urgent:**")
        for flag in urgent:
            response_parts.append(f"• {flag['name']}: {flag.get('action', '')}".rstrip(": "))

    if conditions:
        response_parts.append("**Possible conditions (for clinical consideration):**")
        for cond in conditions:
            response_parts.append(f"• {cond['condition']} ({cond['display_text']})")
        if close_call_label:
            response_parts.append(f"_{close_call_label}_")
    else:
        response_parts.append("No reference condition matched the reported symptoms.")

    if time_course and time_course.get("interpretation"):
        response_parts.append("\n**Symptom Timeline:**")
        response_parts.append(time_course["interpretation"])

    response_parts.append("\n**Recommended Next Step:**")
    if urgent:
        response_parts.append("Seek emergency medical care immediately.")
    else:
        response_parts.append("Consult a general physician.")

    response_parts.append(DISCLAIMER_FOOTER)

    return "\n".join(response_parts)
