import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from learning_assistant.api.dependencies import get_current_user, get_db, get_optional_user
from learning_assistant.catalog.levels import normalize_topic
from learning_assistant.crud import learning_plan_crud
from learning_assistant.models.user.user_model import User
from learning_assistant.schemas.learning import learning_plan_schema
from learning_assistant.services import plan_service

router = APIRouter()
logger = logging.getLogger(__name__)


def _persist_best_effort(db: Session, user: Optional[User], topic: str, plan: Dict[str, Any]) -> None:
    """Sauvegarde le plan d'un utilisateur connecté ; un échec n'empêche pas la réponse."""
    if user is None:
        return
    try:
        learning_plan_crud.create_plan(db, user.id, topic, plan)
    except Exception:
        db.rollback()
        logger.exception("Sauvegarde du plan échouée pour l'utilisateur %s", user.id)


@router.post("/generate-plan")
def generate_plan(
    request: learning_plan_schema.GeneratePlanRequest,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    if not request.question or not request.question.strip():
        raise HTTPException(status_code=400, detail="Question is required")
    try:
        plan = plan_service.plan_from_question(request.question)
    except Exception:
        logger.exception("Erreur lors de la génération du plan")
        raise HTTPException(status_code=500, detail="Failed to generate learning plan")

    _persist_best_effort(db, current_user, plan["topic"], plan)
    return plan


@router.post("/learning-plan/generate")
def generate_plan_from_assessment(
    request: learning_plan_schema.AssessmentPlanRequest,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    if not request.assessmentResult:
        raise HTTPException(status_code=400, detail="Assessment result is required")

    result = dict(request.assessmentResult)
    if current_user is not None:
        result["userId"] = str(current_user.id)
    try:
        plan = plan_service.assemble_plan_from_assessment(result)
    except Exception:
        logger.exception("Erreur lors de l'assemblage du plan depuis l'évaluation")
        raise HTTPException(status_code=500, detail="Failed to generate learning plan")

    _persist_best_effort(db, current_user, plan["topic"], plan)
    return plan


@router.get("/learning-plans", response_model=List[learning_plan_schema.LearningPlan])
def list_learning_plans(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return learning_plan_crud.list_plans(db, current_user.id)


@router.post("/learning-plans", response_model=learning_plan_schema.LearningPlan, status_code=status.HTTP_201_CREATED)
def create_learning_plan(
    payload: learning_plan_schema.LearningPlanCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    topic = normalize_topic(payload.topic)
    if not topic:
        raise HTTPException(status_code=400, detail="Topic is required")
    try:
        plan_data = plan_service.build_study_plan(topic, payload.current_level, payload.goals)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid difficulty")

    plan = learning_plan_crud.create_plan(db, current_user.id, topic, plan_data)
    logger.info("Plan %s créé pour l'utilisateur %s (source=%s)", plan.id, current_user.id, plan_data["source"])
    return plan


def _get_owned_plan(db: Session, user: User, plan_id: int):
    plan = learning_plan_crud.get_plan(db, user.id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="learning_plan_not_found")
    return plan


@router.get("/learning-plans/{plan_id}", response_model=learning_plan_schema.LearningPlan)
def read_learning_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_owned_plan(db, current_user, plan_id)


@router.delete("/learning-plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_learning_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    learning_plan_crud.delete_plan(db, _get_owned_plan(db, current_user, plan_id))


@router.patch("/learning-plans/{plan_id}/resources", response_model=learning_plan_schema.LearningPlan)
def toggle_plan_resource(
    plan_id: int,
    payload: learning_plan_schema.ResourceToggle,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    plan = _get_owned_plan(db, current_user, plan_id)
    try:
        updated = plan_service.toggle_resource(plan.plan_data or {}, payload.topic_index, payload.resource_id)
    except plan_service.PlanUpdateError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return learning_plan_crud.replace_plan_data(db, plan, updated)
