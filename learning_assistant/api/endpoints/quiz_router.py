import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from learning_assistant.api.dependencies import get_optional_user
from learning_assistant.catalog.levels import Difficulty, normalize_topic
from learning_assistant.core.config import settings
from learning_assistant.models.user.user_model import User
from learning_assistant.schemas.quiz import quiz_schema
from learning_assistant.services import quiz_service

router = APIRouter()
logger = logging.getLogger(__name__)


def _validate_quiz_request(request: quiz_schema.QuizRequest) -> tuple[str, Difficulty, int]:
    topic = normalize_topic(request.topic)
    if not topic:
        raise HTTPException(status_code=400, detail="Topic is required")
    if not request.difficulty or not request.difficulty.strip():
        raise HTTPException(status_code=400, detail="Difficulty is required")
    try:
        difficulty = Difficulty.parse(request.difficulty)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid difficulty")

    count = request.count if request.count is not None else settings.DEFAULT_QUIZ_QUESTION_COUNT
    count = max(1, min(count, quiz_service.MAX_QUESTION_COUNT))
    return topic, difficulty, count


@router.post("/generate", response_model=quiz_schema.Quiz)
def generate_quiz(request: quiz_schema.QuizRequest):
    topic, difficulty, count = _validate_quiz_request(request)
    try:
        return quiz_service.generate_quiz(topic, difficulty, count)
    except Exception:
        logger.exception("Erreur lors de la génération du quiz (%s, %s)", topic, difficulty.value)
        raise HTTPException(status_code=500, detail="Failed to generate quiz")


@router.post("/generate/ai", response_model=quiz_schema.Quiz)
def generate_ai_quiz(request: quiz_schema.QuizRequest):
    topic, difficulty, count = _validate_quiz_request(request)
    quiz = quiz_service.generate_ai_quiz(topic, difficulty, count)
    if quiz is None:
        raise HTTPException(status_code=502, detail="quiz_generation_failed")
    return quiz


@router.post("/evaluate", response_model=quiz_schema.AssessmentResult)
def evaluate_quiz(
    request: quiz_schema.QuizEvaluationRequest,
    current_user: Optional[User] = Depends(get_optional_user),
):
    if not request.questionIds:
        raise HTTPException(status_code=400, detail="Question ids are required")
    try:
        return quiz_service.evaluate_quiz(
            quiz_id=request.quizId,
            title=request.quizTitle,
            topic=request.topic,
            question_ids=request.questionIds,
            answers=request.answers,
            user_id=str(current_user.id) if current_user else "guest-user",
        )
    except KeyError as exc:
        logger.warning("Question inconnue dans l'évaluation du quiz %s: %s", request.quizId, exc)
        raise HTTPException(status_code=400, detail="unknown_question")
    except ValueError as exc:
        logger.warning("Réponses hors quiz pour %s: %s", request.quizId, exc)
        raise HTTPException(status_code=400, detail="answer_not_in_quiz")
