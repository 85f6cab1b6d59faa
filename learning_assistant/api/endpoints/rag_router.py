import logging

from fastapi import APIRouter, HTTPException

from learning_assistant.schemas.quiz import quiz_schema
from learning_assistant.services import rag_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=quiz_schema.RagResponse)
def ask(request: quiz_schema.RagRequest):
    if not request.question or not request.question.strip():
        raise HTTPException(status_code=400, detail="Question is required")
    try:
        return rag_service.answer_question(request.question, request.topic or "python")
    except Exception:
        logger.exception("Erreur lors de la génération de la réponse RAG")
        raise HTTPException(status_code=500, detail="Failed to generate response")
