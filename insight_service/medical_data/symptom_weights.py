"""
Symptom Weights
===============

Severity and specificity weights for known symptoms.

    symptom_score = severity_weight x specificity_weight

Severity reflects how much a symptom matters clinically, specificity how
strongly it narrows the differential. A vague, common symptom such as
"headache" scores low; "double vision" scores high.

Keys are looked up with the fuzzy containment rule from
``engines.symptom_normalizer``, so declaration order is significant.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class SymptomWeight:
    """Severity/specificity pair for a single symptom."""
    severity_weight: float
    specificity_weight: float

    @property
    def score(self) -> float:
        return self.severity_weight * self.specificity_weight


# Unknown symptoms: moderately severe, not very specific
DEFAULT_SYMPTOM_WEIGHT = SymptomWeight(0.5, 0.3)


SYMPTOM_WEIGHTS: Dict[str, SymptomWeight] = {
    # === Common symptoms ===
    "fever": SymptomWeight(0.7, 0.3),
    "headache": SymptomWeight(0.5, 0.2),
    "fatigue": SymptomWeight(0.6, 0.2),
    "weakness": SymptomWeight(0.7, 0.3),
    "pain": SymptomWeight(0.6, 0.2),
    "joint pain": SymptomWeight(0.6, 0.4),
    "muscle pain": SymptomWeight(0.5, 0.3),
    "chest pain": SymptomWeight(0.8, 0.4),
    "abdominal pain": SymptomWeight(0.7, 0.3),
    "back pain": SymptomWeight(0.6, 0.2),

    # === Neurological ===
    "dizziness": SymptomWeight(0.6, 0.3),
    "vertigo": SymptomWeight(0.7, 0.5),
    "numbness": SymptomWeight(0.7, 0.5),
    "tingling": SymptomWeight(0.6, 0.4),
    "vision problems": SymptomWeight(0.8, 0.6),
    "blurred vision": SymptomWeight(0.7, 0.5),
    "double vision": SymptomWeight(0.8, 0.7),
    "memory problems": SymptomWeight(0.7, 0.4),
    "confusion": SymptomWeight(0.8, 0.5),
    "seizures": SymptomWeight(0.9, 0.7),

    # === Systemic ===
    "weight loss": SymptomWeight(0.8, 0.6),
    "night sweats": SymptomWeight(0.7, 0.7),
    "swollen glands": SymptomWeight(0.6, 0.5),
    "rash": SymptomWeight(0.6, 0.4),
    "skin changes": SymptomWeight(0.5, 0.4),

    # === Respiratory ===
    "cough": SymptomWeight(0.5, 0.2),
    "shortness of breath": SymptomWeight(0.8, 0.4),
    "difficulty breathing": SymptomWeight(0.9, 0.5),

    # === Gastrointestinal ===
    "nausea": SymptomWeight(0.5, 0.2),
    "vomiting": SymptomWeight(0.6, 0.3),
    "diarrhea": SymptomWeight(0.5, 0.2),
    "constipation": SymptomWeight(0.4, 0.2),

    # === Pattern-specific ===
    "orthostatic dizziness": SymptomWeight(0.7, 0.8),
    "migratory joint pain": SymptomWeight(0.7, 0.7),
    "transient rash": SymptomWeight(0.6, 0.6),
    "dry eyes": SymptomWeight(0.4, 0.5),
    "dry mouth": SymptomWeight(0.4, 0.5),

    # === Endocrine / autonomic ===
    "heart palpitations": SymptomWeight(0.7, 0.5),
    "anxiety": SymptomWeight(0.5, 0.3),
    "tremor": SymptomWeight(0.6, 0.5),
    "sweating": SymptomWeight(0.4, 0.3),
    "heat intolerance": SymptomWeight(0.5, 0.6),
    "cold intolerance": SymptomWeight(0.5, 0.6),
    "excessive thirst": SymptomWeight(0.5, 0.6),
    "frequent urination": SymptomWeight(0.5, 0.5),

    # === Other ===
    "fainting": SymptomWeight(0.9, 0.5),
    "swollen joints": SymptomWeight(0.6, 0.5),
    "balance problems": SymptomWeight(0.7, 0.5),
    "sore throat": SymptomWeight(0.4, 0.2),
}
