# Medical Reference Data Package
"""
Static reference tables for the likelihood engine.

All tables are read-only for the lifetime of the process.
"""

from .symptom_weights import SymptomWeight, SYMPTOM_WEIGHTS, DEFAULT_SYMPTOM_WEIGHT
from .cluster_map import ClusterTag, SYMPTOM_CLUSTER_MAP, DEFAULT_CLUSTER
from .system_map import (
    BodySystem,
    SYMPTOM_SYSTEM_MAP,
    CONDITION_SYSTEM_MAP,
    DEFAULT_SYSTEM,
)
from .disease_database import (
    DiseaseEntry,
    DISEASE_DATABASE,
    ReferenceDataError,
    get_disease,
    list_conditions,
    validate_disease_database,
)

__all__ = [
    "SymptomWeight",
    "SYMPTOM_WEIGHTS",
    "DEFAULT_SYMPTOM_WEIGHT",
    "ClusterTag",
    "SYMPTOM_CLUSTER_MAP",
    "DEFAULT_CLUSTER",
    "BodySystem",
    "SYMPTOM_SYSTEM_MAP",
    "CONDITION_SYSTEM_MAP",
    "DEFAULT_SYSTEM",
    "DiseaseEntry",
    "DISEASE_DATABASE",
    "ReferenceDataError",
    "get_disease",
    "list_conditions",
    "validate_disease_database",
]
