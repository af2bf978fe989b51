"""
Symptom -> Cluster Map
======================

Coarse pathophysiological clusters used for explainability and for
choosing the "dominant" picture of a presentation.

Where a symptom belongs to several clusters the lists are the union of
every clinical association, in first-seen order.
"""

from enum import Enum
from typing import Dict, List


class ClusterTag(str, Enum):
    """Pathophysiological cluster."""
    AUTOIMMUNE = "autoimmune"
    ENDOCRINE = "endocrine"
    NEUROLOGIC = "neurologic"
    INFECTIOUS = "infectious"
    MALIGNANCY_HEMATOLOGIC = "malignancy/hematologic"
    AUTONOMIC_DYSFUNCTION = "autonomic dysfunction"
    METABOLIC_NUTRITIONAL = "metabolic/nutritional"


# Catch-all for symptoms with no cluster association
DEFAULT_CLUSTER = ClusterTag.METABOLIC_NUTRITIONAL


SYMPTOM_CLUSTER_MAP: Dict[str, List[ClusterTag]] = {
    # Autoimmune
    "joint pain": [ClusterTag.AUTOIMMUNE],
    "migratory joint pain": [ClusterTag.AUTOIMMUNE],
    "rash": [ClusterTag.AUTOIMMUNE],
    "transient rash": [ClusterTag.AUTOIMMUNE],
    "swollen joints": [ClusterTag.AUTOIMMUNE],
    "dry eyes": [ClusterTag.AUTOIMMUNE],
    "dry mouth": [ClusterTag.AUTOIMMUNE],
    "fever": [
        ClusterTag.INFECTIOUS,
        ClusterTag.AUTOIMMUNE,
        ClusterTag.MALIGNANCY_HEMATOLOGIC,
    ],

    # Infectious
    "night sweats": [ClusterTag.INFECTIOUS, ClusterTag.MALIGNANCY_HEMATOLOGIC],
    "swollen glands": [ClusterTag.INFECTIOUS, ClusterTag.MALIGNANCY_HEMATOLOGIC],
    "cough": [ClusterTag.INFECTIOUS],

    # Neurologic
    "numbness": [ClusterTag.NEUROLOGIC],
    "tingling": [ClusterTag.NEUROLOGIC],
    "vision problems": [ClusterTag.NEUROLOGIC],
    "blurred vision": [ClusterTag.NEUROLOGIC],
    "double vision": [ClusterTag.NEUROLOGIC],
    "memory problems": [ClusterTag.NEUROLOGIC],
    "confusion": [ClusterTag.NEUROLOGIC],
    "seizures": [ClusterTag.NEUROLOGIC],
    "balance problems": [ClusterTag.NEUROLOGIC],
    "weakness": [
        ClusterTag.NEUROLOGIC,
        ClusterTag.METABOLIC_NUTRITIONAL,
        ClusterTag.ENDOCRINE,
    ],

    # Autonomic
    "orthostatic dizziness": [
        ClusterTag.AUTONOMIC_DYSFUNCTION,
        ClusterTag.ENDOCRINE,
    ],
    "dizziness": [
        ClusterTag.AUTONOMIC_DYSFUNCTION,
        ClusterTag.NEUROLOGIC,
        ClusterTag.ENDOCRINE,
    ],
    "heart palpitations": [
        ClusterTag.AUTONOMIC_DYSFUNCTION,
        ClusterTag.ENDOCRINE,
    ],

    # Metabolic / endocrine
    "fatigue": [
        ClusterTag.METABOLIC_NUTRITIONAL,
        ClusterTag.ENDOCRINE,
        ClusterTag.AUTOIMMUNE,
    ],
    "weight loss": [ClusterTag.ENDOCRINE, ClusterTag.MALIGNANCY_HEMATOLOGIC],
    "weight gain": [ClusterTag.ENDOCRINE],
    "sweating": [ClusterTag.ENDOCRINE],
    "cold intolerance": [ClusterTag.ENDOCRINE],
    "heat intolerance": [ClusterTag.ENDOCRINE],
}
