"""
gateway/routers/symptoms.py

POST /symptoms/analyze endpoint.
Results are informational only and never a diagnosis.
"""

import structlog
from fastapi import APIRouter, HTTPException

from gateway.schemas import SymptomAnalysis, SymptomRequest
from triage.engine import InvalidSymptomInput, analyze_symptoms

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/symptoms", tags=["symptoms"])


@router.post("/analyze", response_model=SymptomAnalysis)
async def analyze(payload: SymptomRequest) -> SymptomAnalysis:
    try:
        return await analyze_symptoms(payload.symptoms)
    except InvalidSymptomInput as exc:
        logger.info("symptom_input_rejected", error=str(exc))
        raise HTTPException(status_code=422, detail=str(exc))
