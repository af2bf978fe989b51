"""
Wellness Insight API - FastAPI Application

Symptom-to-condition likelihood microservice.

Endpoints:
- GET /health - Service status
- GET /conditions - Reference conditions
- POST /extract_symptoms - Split free text into symptom tokens
- POST /analyze - Ranked conditions, clusters, red flags and time course

This service is NOT a diagnostic system - it provides a preliminary,
explainable ranking only.
"""

import os
import logging
from typing import Optional, List, Dict, Any, Union, Literal
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from . import __version__
from .engines.likelihood_engine import LikelihoodEngine
from .medical_data.disease_database import list_conditions
from .model_adapters.explanation_selector import ExplanationSelector
from .safety_config import format_safe_response

logger = logging.getLogger(__name__)

DEFAULT_MODE = os.getenv("INSIGHT_SCORING_MODE", "advanced").lower()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(
    title="Wellness Insight",
    description="Deterministic symptom-to-condition likelihood service",
    version=__version__
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize engines (reference data is validated here, at startup)
engines = {
    "advanced": LikelihoodEngine(mode="advanced"),
    "simple": LikelihoodEngine(mode="simple"),
}
explanation_selector = ExplanationSelector()


# Request/Response models
class Profile(BaseModel):
    age: Optional[str] = None
    gender: Optional[str] = None


class AnalyzeRequest(BaseModel):
    symptoms: Union[str, List[str]]
    answers: List[str] = Field(default_factory=list)
    profile: Optional[Profile] = None
    mode: Optional[Literal["advanced", "simple"]] = None
    use_llm: bool = False


class ExtractRequest(BaseModel):
    text: str


class AnalyzeResponse(BaseModel):
    mode: str
    conditions: List[Dict[str, Any]]
    dominant_clusters: List[str]
    cluster_scores: Dict[str, float]
    system_involvement: List[Dict[str, Any]]
    red_flags: List[Dict[str, Any]]
    urgent: bool
    patterns: List[Dict[str, Any]]
    time_course: Dict[str, Any]
    close_call_label: Optional[str] = None
    safety_notice: str
    safe_summary: str


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "version": __version__,
        "default_mode": DEFAULT_MODE,
        "llm": explanation_selector.get_status(),
    }


@app.get("/conditions")
async def conditions():
    return {"conditions": list_conditions()}


@app.post("/extract_symptoms")
async def extract_symptoms(request: ExtractRequest):
    try:
        return engines["advanced"].extract_symptoms(request.text)
    except Exception as e:
        logger.error(f"Symptom extraction failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest):
    mode = request.mode or DEFAULT_MODE
    engine = engines.get(mode)
    if engine is None:
        raise HTTPException(status_code=400, detail=f"Unknown scoring mode: {mode}")

    try:
        profile = request.profile.model_dump() if request.profile else None
        result = engine.analyze(request.symptoms, request.answers, profile)

        # Optional decoration, awaited outside the scoring core
        if request.use_llm:
            result = await explanation_selector.decorate(result)

        payload = result.to_dict()
        payload["safe_summary"] = format_safe_response(
            payload["conditions"],
            time_course=payload["time_course"],
            red_flags=payload["red_flags"],
            close_call_label=payload["close_call_label"],
        )
        return payload

    except Exception as e:
        logger.error(f"Analysis failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
