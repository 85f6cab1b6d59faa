import logging

from fastapi import APIRouter, HTTPException

from learning_assistant.schemas.quiz import quiz_schema
from learning_assistant.services import rag_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/explain", response_model=quiz_schema.ExplainResponse)
def explain(request: quiz_schema.ExplainRequest):
    """Explique un concept au niveau de l'utilisateur (LLM, sinon base de connaissances)."""
    if not request.concept or not request.concept.strip():
        raise HTTPException(status_code=400, detail="Concept is required")
    try:
        return rag_service.explain_concept(request.concept.strip(), request.currentLevel, request.topic)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid difficulty")
