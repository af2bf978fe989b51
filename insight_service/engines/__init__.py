# Likelihood Engines Package
"""
Core engines for symptom-to-condition likelihood ranking.
"""

from .likelihood_engine import (
    LikelihoodEngine,
    ScoringMode,
    ConditionResult,
    AnalysisResult,
)
from .explainability import ExplainabilityEngine
from .scoring import AdvancedScoringStrategy, SimpleScoringStrategy, get_scoring_strategy

__all__ = [
    "LikelihoodEngine",
    "ScoringMode",
    "ConditionResult",
    "AnalysisResult",
    "ExplainabilityEngine",
    "AdvancedScoringStrategy",
    "SimpleScoringStrategy",
    "get_scoring_strategy",
]
