# Model Adapters Package
"""
Adapters for hosted LLM APIs, used only to phrase explanations.
"""

from .explanation_selector import ExplanationSelector
from .api_model_adapter import APIAdapter, GroqAdapter, OpenRouterAdapter, RateLimitError

__all__ = [
    "ExplanationSelector",
    "APIAdapter",
    "GroqAdapter",
    "OpenRouterAdapter",
    "RateLimitError",
]
