"""
Body-System Maps
================

Anatomical/functional groupings used for multi-system overlap scoring:

- SYMPTOM_SYSTEM_MAP: which systems a reported symptom points at
- CONDITION_SYSTEM_MAP: which systems a reference condition spans

Conditions spanning several systems are favoured when the presentation
itself involves several systems.
"""

from enum import Enum
from typing import Dict, List


class BodySystem(str, Enum):
    """Anatomical / functional body system."""
    ENDOCRINE_METABOLIC = "endocrine/metabolic"
    CARDIAC = "cardiac"
    NEUROLOGICAL = "neurological"
    AUTONOMIC = "autonomic"
    GASTROINTESTINAL = "gastrointestinal"
    HEMATOLOGIC = "hematologic"
    AUTOIMMUNE = "autoimmune"
    RESPIRATORY = "respiratory"


DEFAULT_SYSTEM = BodySystem.ENDOCRINE_METABOLIC


SYMPTOM_SYSTEM_MAP: Dict[str, List[BodySystem]] = {
    # Endocrine / metabolic
    "weight loss": [BodySystem.ENDOCRINE_METABOLIC],
    "weight gain": [BodySystem.ENDOCRINE_METABOLIC],
    "heat intolerance": [BodySystem.ENDOCRINE_METABOLIC],
    "cold intolerance": [BodySystem.ENDOCRINE_METABOLIC],
    "sweating": [BodySystem.ENDOCRINE_METABOLIC],
    "excessive thirst": [BodySystem.ENDOCRINE_METABOLIC],
    "frequent urination": [BodySystem.ENDOCRINE_METABOLIC],
    "tremor": [BodySystem.ENDOCRINE_METABOLIC, BodySystem.NEUROLOGICAL],

    # Cardiac
    "heart palpitations": [BodySystem.CARDIAC, BodySystem.AUTONOMIC],
    "chest pain": [BodySystem.CARDIAC],
    "shortness of breath": [BodySystem.CARDIAC, BodySystem.RESPIRATORY],
    "difficulty breathing": [BodySystem.CARDIAC, BodySystem.RESPIRATORY],

    # Neurological
    "numbness": [BodySystem.NEUROLOGICAL],
    "tingling": [BodySystem.NEUROLOGICAL],
    "weakness": [BodySystem.NEUROLOGICAL, BodySystem.HEMATOLOGIC],
    "vision problems": [BodySystem.NEUROLOGICAL],
    "blurred vision": [BodySystem.NEUROLOGICAL],
    "double vision": [BodySystem.NEUROLOGICAL],
    "memory problems": [BodySystem.NEUROLOGICAL],
    "confusion": [BodySystem.NEUROLOGICAL],
    "seizures": [BodySystem.NEUROLOGICAL],
    "balance problems": [BodySystem.NEUROLOGICAL],

    # Autonomic
    "orthostatic dizziness": [BodySystem.AUTONOMIC],
    "dizziness": [BodySystem.AUTONOMIC, BodySystem.NEUROLOGICAL],
    "brain fog": [BodySystem.AUTONOMIC],

    # Gastrointestinal
    "nausea": [BodySystem.GASTROINTESTINAL],
    "vomiting": [BodySystem.GASTROINTESTINAL],
    "diarrhea": [BodySystem.GASTROINTESTINAL],
    "constipation": [BodySystem.GASTROINTESTINAL],
    "abdominal pain": [BodySystem.GASTROINTESTINAL],

    # Hematologic
    "fatigue": [
        BodySystem.HEMATOLOGIC,
        BodySystem.ENDOCRINE_METABOLIC,
        BodySystem.AUTOIMMUNE,
    ],
    "swollen glands": [BodySystem.HEMATOLOGIC],

    # Autoimmune
    "joint pain": [BodySystem.AUTOIMMUNE],
    "rash": [BodySystem.AUTOIMMUNE],
    "fever": [BodySystem.AUTOIMMUNE],

    # Respiratory
    "cough": [BodySystem.RESPIRATORY],
}


_THYROID_ADRENERGIC = [
    BodySystem.ENDOCRINE_METABOLIC,
    BodySystem.CARDIAC,
    BodySystem.AUTONOMIC,
]

# Keyed by the exact DiseaseEntry name
CONDITION_SYSTEM_MAP: Dict[str, List[BodySystem]] = {
    "Systemic Lupus Erythematosus (SLE)": [
        BodySystem.AUTOIMMUNE, BodySystem.CARDIAC, BodySystem.HEMATOLOGIC,
    ],
    "Rheumatoid Arthritis": [BodySystem.AUTOIMMUNE],
    "Adult-Onset Still's Disease (AOSD)": [
        BodySystem.AUTOIMMUNE, BodySystem.HEMATOLOGIC,
    ],
    "Sjögren's Syndrome": [BodySystem.AUTOIMMUNE, BodySystem.NEUROLOGICAL],
    "Systemic Vasculitis": [
        BodySystem.AUTOIMMUNE, BodySystem.HEMATOLOGIC, BodySystem.NEUROLOGICAL,
    ],
    "Sarcoidosis": [BodySystem.AUTOIMMUNE, BodySystem.RESPIRATORY],
    "Multiple Sclerosis (MS)": [BodySystem.NEUROLOGICAL, BodySystem.AUTONOMIC],
    "Guillain-Barré Syndrome (GBS)": [
        BodySystem.NEUROLOGICAL, BodySystem.RESPIRATORY,
    ],
    "Adrenal Insufficiency": [
        BodySystem.ENDOCRINE_METABOLIC,
        BodySystem.AUTONOMIC,
        BodySystem.GASTROINTESTINAL,
    ],
    "Hyperthyroidism": _THYROID_ADRENERGIC,
    "Hypothyroidism": [BodySystem.ENDOCRINE_METABOLIC],
    "Pheochromocytoma": _THYROID_ADRENERGIC,
    "Diabetes Mellitus Type 2": [
        BodySystem.ENDOCRINE_METABOLIC, BodySystem.CARDIAC,
    ],
    "Hyperparathyroidism": [BodySystem.ENDOCRINE_METABOLIC],
    "Graves' Disease": _THYROID_ADRENERGIC,
    "POTS (Postural Orthostatic Tachycardia Syndrome)": [
        BodySystem.AUTONOMIC, BodySystem.CARDIAC, BodySystem.NEUROLOGICAL,
    ],
    "Autonomic Dysfunction": [
        BodySystem.AUTONOMIC, BodySystem.CARDIAC, BodySystem.NEUROLOGICAL,
    ],
    "Lymphoma": [BodySystem.HEMATOLOGIC, BodySystem.AUTOIMMUNE],
    "Chronic EBV Infection": [BodySystem.HEMATOLOGIC],
    "Chronic CMV Infection": [BodySystem.HEMATOLOGIC],
    "Tuberculosis (TB)": [BodySystem.RESPIRATORY, BodySystem.HEMATOLOGIC],
    "Vitamin B12 Deficiency": [
        BodySystem.HEMATOLOGIC, BodySystem.NEUROLOGICAL,
    ],
    "Iron Deficiency Anemia": [BodySystem.HEMATOLOGIC, BodySystem.CARDIAC],
}
