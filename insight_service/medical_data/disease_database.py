"""
Disease Database
================

Reference conditions for the likelihood engine.

Each entry carries:
- name: unique key, used as the join key by every extractor
- clusters: pathophysiological clusters the condition belongs to
- symptom_relevance: symptom -> relevance (0-1), defines which symptoms
  matter for the condition and how strongly
- description: short lay description
- external_reference_term: WebMD search term for further reading

The table is loaded once and never mutated. ``validate_disease_database``
is run at engine start-up; a broken entry is a fatal configuration error.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .cluster_map import ClusterTag


class ReferenceDataError(Exception):
    """Raised when a reference table violates a structural invariant."""
    pass


@dataclass(frozen=True)
class DiseaseEntry:
    """A single reference condition."""
    name: str
    clusters: Tuple[ClusterTag, ...]
    symptom_relevance: Mapping[str, float]
    description: str
    external_reference_term: str

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(
            self, "symptom_relevance", MappingProxyType(dict(self.symptom_relevance))
        )

    @property
    def expected_symptom_count(self) -> int:
        return len(self.symptom_relevance)


DISEASE_DATABASE: Tuple[DiseaseEntry, ...] = (
    # ===== AUTOIMMUNE =====
    DiseaseEntry(
        name="Systemic Lupus Erythematosus (SLE)",
        clusters=(ClusterTag.AUTOIMMUNE,),
        symptom_relevance={
            "fever": 0.7,
            "fatigue": 0.8,
            "joint pain": 0.8,
            "rash": 0.7,
            "chest pain": 0.6,
            "hair loss": 0.6,
            "mouth sores": 0.5,
        },
        description=(
            "Autoimmune disease causing inflammation throughout the body, "
            "often with joint pain, skin rashes, and fatigue."
        ),
        external_reference_term="lupus",
    ),
    DiseaseEntry(
        name="Rheumatoid Arthritis",
        clusters=(ClusterTag.AUTOIMMUNE,),
        symptom_relevance={
            "joint pain": 0.9,
            "morning stiffness": 0.8,
            "fatigue": 0.7,
            "swollen joints": 0.9,
            "fever": 0.4,
        },
        description=(
            "Chronic autoimmune condition causing joint inflammation, pain, "
            "and stiffness, especially in the morning."
        ),
        external_reference_term="rheumatoid arthritis",
    ),
    DiseaseEntry(
        name="Adult-Onset Still's Disease (AOSD)",
        clusters=(ClusterTag.AUTOIMMUNE,),
        symptom_relevance={
            "fever": 0.9,
            "joint pain": 0.8,
            "rash": 0.7,
            "sore throat": 0.6,
            "fatigue": 0.8,
            "muscle pain": 0.7,
            "migratory joint pain": 0.8,
            "transient rash": 0.7,
        },
        description=(
            "Rare inflammatory condition with high fevers, joint pain, and a "
            "characteristic salmon-colored rash."
        ),
        external_reference_term="adult still disease",
    ),
    DiseaseEntry(
        name="Sjögren's Syndrome",
        clusters=(ClusterTag.AUTOIMMUNE,),
        symptom_relevance={
            "dry eyes": 0.9,
            "dry mouth": 0.9,
            "fatigue": 0.7,
            "joint pain": 0.6,
            "numbness": 0.5,
            "vision problems": 0.6,
        },
        description=(
            "Autoimmune disorder causing dry eyes and mouth, often with "
            "fatigue and joint pain."
        ),
        external_reference_term="sjogren syndrome",
    ),
    DiseaseEntry(
        name="Systemic Vasculitis",
        clusters=(ClusterTag.AUTOIMMUNE,),
        symptom_relevance={
            "fever": 0.7,
            "fatigue": 0.7,
            "joint pain": 0.6,
            "rash": 0.7,
            "weight loss": 0.6,
            "night sweats": 0.5,
            "numbness": 0.5,
        },
        description=(
            "Inflammation of blood vessels causing various symptoms depending "
            "on affected organs."
        ),
        external_reference_term="vasculitis",
    ),
    DiseaseEntry(
        name="Sarcoidosis",
        clusters=(ClusterTag.AUTOIMMUNE,),
        symptom_relevance={
            "shortness of breath": 0.7,
            "cough": 0.6,
            "fatigue": 0.7,
            "swollen glands": 0.6,
            "rash": 0.5,
            "joint pain": 0.5,
            "vision problems": 0.4,
        },
        description=(
            "Inflammatory disease causing small clusters of inflammatory "
            "cells in various organs."
        ),
        external_reference_term="sarcoidosis",
    ),

    # ===== NEUROLOGIC =====
    DiseaseEntry(
        name="Multiple Sclerosis (MS)",
        clusters=(ClusterTag.NEUROLOGIC,),
        symptom_relevance={
            "numbness": 0.8,
            "tingling": 0.8,
            "vision problems": 0.8,
            "blurred vision": 0.7,
            "double vision": 0.7,
            "weakness": 0.7,
            "dizziness": 0.6,
            "fatigue": 0.7,
            "balance problems": 0.7,
        },
        description=(
            "Autoimmune disease affecting the central nervous system, causing "
            "various neurological symptoms."
        ),
        external_reference_term="multiple sclerosis",
    ),
    DiseaseEntry(
        name="Guillain-Barré Syndrome (GBS)",
        clusters=(ClusterTag.NEUROLOGIC, ClusterTag.INFECTIOUS),
        symptom_relevance={
            "weakness": 0.9,
            "numbness": 0.8,
            "tingling": 0.8,
            "difficulty breathing": 0.7,
            "pain": 0.6,
        },
        description=(
            "Rare autoimmune disorder causing rapid-onset muscle weakness, "
            "often after an infection."
        ),
        external_reference_term="guillain barre syndrome",
    ),

    # ===== ENDOCRINE =====
    DiseaseEntry(
        name="Adrenal Insufficiency",
        clusters=(ClusterTag.ENDOCRINE,),
        symptom_relevance={
            "fatigue": 0.8,
            "weakness": 0.7,
            "weight loss": 0.6,
            "dizziness": 0.7,
            "orthostatic dizziness": 0.8,
            "nausea": 0.5,
            "abdominal pain": 0.5,
        },
        description=(
            "Condition where adrenal glands don't produce enough hormones, "
            "causing fatigue and weakness."
        ),
        external_reference_term="adrenal insufficiency",
    ),
    DiseaseEntry(
        name="Hyperthyroidism",
        clusters=(ClusterTag.ENDOCRINE,),
        symptom_relevance={
            "weight loss": 0.7,
            "fatigue": 0.6,
            "anxiety": 0.6,
            "sweating": 0.6,
            "heart palpitations": 0.7,
        },
        description=(
            "Overactive thyroid gland causing increased metabolism, weight "
            "loss, and anxiety."
        ),
        external_reference_term="hyperthyroidism",
    ),
    DiseaseEntry(
        name="Hypothyroidism",
        clusters=(ClusterTag.ENDOCRINE,),
        symptom_relevance={
            "fatigue": 0.8,
            "weight gain": 0.7,
            "weakness": 0.6,
            "depression": 0.6,
            "cold intolerance": 0.6,
        },
        description=(
            "Underactive thyroid gland causing fatigue, weight gain, and "
            "slowed metabolism."
        ),
        external_reference_term="hypothyroidism",
    ),
    DiseaseEntry(
        name="Pheochromocytoma",
        clusters=(ClusterTag.ENDOCRINE,),
        symptom_relevance={
            "heart palpitations": 0.9,
            "sweating": 0.8,
            "anxiety": 0.7,
            "tremor": 0.7,
            "headache": 0.6,
            "high blood pressure": 0.8,
        },
        description=(
            "Rare tumor of adrenal glands causing episodic high blood "
            "pressure, palpitations, and sweating."
        ),
        external_reference_term="pheochromocytoma",
    ),
    DiseaseEntry(
        name="Diabetes Mellitus Type 2",
        clusters=(ClusterTag.ENDOCRINE, ClusterTag.METABOLIC_NUTRITIONAL),
        symptom_relevance={
            "weight loss": 0.7,
            "fatigue": 0.7,
            "frequent urination": 0.9,
            "excessive thirst": 0.9,
            "blurred vision": 0.6,
        },
        description=(
            "Metabolic disorder causing high blood sugar, often with "
            "increased urination, thirst, and weight loss."
        ),
        external_reference_term="diabetes type 2",
    ),
    DiseaseEntry(
        name="Hyperparathyroidism",
        clusters=(ClusterTag.ENDOCRINE,),
        symptom_relevance={
            "fatigue": 0.7,
            "weakness": 0.6,
            "depression": 0.5,
            "bone pain": 0.6,
            "kidney stones": 0.7,
        },
        description=(
            "Overactive parathyroid glands causing high calcium levels, "
            "fatigue, and weakness."
        ),
        external_reference_term="hyperparathyroidism",
    ),
    DiseaseEntry(
        name="Graves' Disease",
        clusters=(ClusterTag.ENDOCRINE,),
        symptom_relevance={
            "weight loss": 0.8,
            "heart palpitations": 0.9,
            "anxiety": 0.8,
            "tremor": 0.8,
            "heat intolerance": 0.8,
            "sweating": 0.7,
            "fatigue": 0.6,
        },
        description=(
            "Autoimmune cause of hyperthyroidism with weight loss, rapid "
            "heartbeat, and anxiety."
        ),
        external_reference_term="graves disease",
    ),

    # ===== AUTONOMIC =====
    DiseaseEntry(
        name="POTS (Postural Orthostatic Tachycardia Syndrome)",
        clusters=(ClusterTag.AUTONOMIC_DYSFUNCTION,),
        symptom_relevance={
            "dizziness": 0.8,
            "orthostatic dizziness": 0.9,
            "fatigue": 0.7,
            "heart palpitations": 0.7,
            "numbness": 0.5,
            "brain fog": 0.6,
        },
        description=(
            "Condition causing rapid heart rate and dizziness when standing, "
            "often with fatigue."
        ),
        external_reference_term="pots syndrome",
    ),
    DiseaseEntry(
        name="Autonomic Dysfunction",
        clusters=(ClusterTag.AUTONOMIC_DYSFUNCTION,),
        symptom_relevance={
            "orthostatic dizziness": 0.8,
            "dizziness": 0.7,
            "numbness": 0.6,
            "fatigue": 0.6,
            "heart palpitations": 0.6,
        },
        description=(
            "Dysfunction of the autonomic nervous system affecting heart "
            "rate, blood pressure, and other automatic functions."
        ),
        external_reference_term="autonomic dysfunction",
    ),

    # ===== MALIGNANCY / HEMATOLOGIC =====
    DiseaseEntry(
        name="Lymphoma",
        clusters=(ClusterTag.MALIGNANCY_HEMATOLOGIC,),
        symptom_relevance={
            "swollen glands": 0.8,
            "weight loss": 0.8,
            "night sweats": 0.8,
            "fever": 0.7,
            "fatigue": 0.7,
            "itching": 0.5,
        },
        description=(
            "Cancer of the lymphatic system, often presenting with swollen "
            "lymph nodes, weight loss, and night sweats."
        ),
        external_reference_term="lymphoma",
    ),

    # ===== INFECTIOUS =====
    DiseaseEntry(
        name="Chronic EBV Infection",
        clusters=(ClusterTag.INFECTIOUS,),
        symptom_relevance={
            "fatigue": 0.8,
            "fever": 0.6,
            "swollen glands": 0.7,
            "sore throat": 0.6,
            "night sweats": 0.5,
        },
        description=(
            "Persistent Epstein-Barr virus infection causing chronic fatigue "
            "and other symptoms."
        ),
        external_reference_term="epstein barr virus",
    ),
    DiseaseEntry(
        name="Chronic CMV Infection",
        clusters=(ClusterTag.INFECTIOUS,),
        symptom_relevance={
            "fatigue": 0.7,
            "fever": 0.6,
            "swollen glands": 0.6,
            "night sweats": 0.5,
        },
        description=(
            "Persistent cytomegalovirus infection causing fatigue and "
            "flu-like symptoms."
        ),
        external_reference_term="cmv infection",
    ),
    DiseaseEntry(
        name="Tuberculosis (TB)",
        clusters=(ClusterTag.INFECTIOUS,),
        symptom_relevance={
            "cough": 0.8,
            "weight loss": 0.7,
            "night sweats": 0.8,
            "fever": 0.7,
            "fatigue": 0.7,
            "chest pain": 0.6,
        },
        description=(
            "Bacterial infection primarily affecting the lungs, causing "
            "persistent cough, weight loss, and night sweats."
        ),
        external_reference_term="tuberculosis",
    ),

    # ===== METABOLIC / NUTRITIONAL =====
    DiseaseEntry(
        name="Vitamin B12 Deficiency",
        clusters=(ClusterTag.METABOLIC_NUTRITIONAL,),
        symptom_relevance={
            "fatigue": 0.7,
            "weakness": 0.6,
            "numbness": 0.7,
            "tingling": 0.7,
            "memory problems": 0.5,
        },
        description=(
            "Deficiency causing fatigue, neurological symptoms, and anemia."
        ),
        external_reference_term="b12 deficiency",
    ),
    DiseaseEntry(
        name="Iron Deficiency Anemia",
        clusters=(ClusterTag.METABOLIC_NUTRITIONAL,),
        symptom_relevance={
            "fatigue": 0.8,
            "weakness": 0.7,
            "shortness of breath": 0.6,
            "dizziness": 0.6,
        },
        description=(
            "Low iron levels causing fatigue, weakness, and shortness of "
            "breath."
        ),
        external_reference_term="iron deficiency anemia",
    ),
)


_DISEASE_INDEX: Dict[str, DiseaseEntry] = {d.name: d for d in DISEASE_DATABASE}


def get_disease(name: str) -> Optional[DiseaseEntry]:
    """Look up a condition by its exact name."""
    return _DISEASE_INDEX.get(name)


def list_conditions() -> List[Dict[str, object]]:
    """Public summary of every reference condition, in declaration order."""
    return [
        {
            "name": d.name,
            "clusters": [c.value for c in d.clusters],
            "description": d.description,
            "external_reference_term": d.external_reference_term,
        }
        for d in DISEASE_DATABASE
    ]


def validate_disease_database(
    database: Tuple[DiseaseEntry, ...] = DISEASE_DATABASE
) -> None:
    """
    Check structural invariants of the disease table.

    Raises:
        ReferenceDataError: duplicate names, empty or out-of-range
            relevance maps, or entries without clusters
    """
    seen = set()
    for entry in database:
        if not entry.name:
            raise ReferenceDataError("Condition entry without a name")
        if entry.name in seen:
            raise ReferenceDataError(f"Duplicate condition name: {entry.name}")
        seen.add(entry.name)

        if not entry.symptom_relevance:
            raise ReferenceDataError(
                f"Condition '{entry.name}' has no symptom relevance map"
            )
        for symptom, relevance in entry.symptom_relevance.items():
            if not 0.0 <= relevance <= 1.0:
                raise ReferenceDataError(
                    f"Relevance {relevance} for '{symptom}' in "
                    f"'{entry.name}' is outside [0, 1]"
                )

        if not entry.clusters:
            raise ReferenceDataError(f"Condition '{entry.name}' has no clusters")
        for cluster in entry.clusters:
            if not isinstance(cluster, ClusterTag):
                raise ReferenceDataError(
                    f"Unknown cluster {cluster!r} in '{entry.name}'"
                )
