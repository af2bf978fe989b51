# Wellness Insight Service Package
"""
Wellness Insight - likelihood service

This package provides:
- Deterministic symptom-to-condition likelihood engine
- Static medical reference tables
- Optional LLM-phrased explanations (Groq / OpenRouter)
- FastAPI HTTP surface
"""

__version__ = "1.0.0"
