from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from learning_assistant.api.dependencies import get_current_user, get_db
from learning_assistant.crud import assessment_crud
from learning_assistant.models.user.user_model import User
from learning_assistant.schemas.assessment import assessment_schema
from learning_assistant.schemas.quiz import quiz_schema
from learning_assistant.services.assessment_service import AssessmentService

router = APIRouter()


@router.get("", response_model=List[assessment_schema.AssessmentSummary])
def list_assessments(db: Session = Depends(get_db)):
    return assessment_crud.list_assessments(db)


@router.get("/{assessment_id}", response_model=assessment_schema.AssessmentDetail)
def read_assessment(assessment_id: int, db: Session = Depends(get_db)):
    assessment = assessment_crud.get_assessment(db, assessment_id)
    if not assessment:
        raise HTTPException(status_code=404, detail="assessment_not_found")
    return assessment


@router.post("/{assessment_id}/submit", response_model=quiz_schema.AssessmentResult)
def submit_assessment(
    assessment_id: int,
    payload: assessment_schema.AssessmentSubmission,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return AssessmentService(db, current_user).submit(assessment_id, payload.answers)


@router.get("/{assessment_id}/results", response_model=assessment_schema.AssessmentResults)
def read_assessment_results(
    assessment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return AssessmentService(db, current_user).results(assessment_id)
