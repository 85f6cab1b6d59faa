from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from learning_assistant.models.assessment.assessment_model import Assessment
from learning_assistant.models.assessment.response_model import Response
from learning_assistant.models.progress.user_progress_model import UserProgress


def list_assessments(db: Session) -> List[Assessment]:
    return db.query(Assessment).order_by(Assessment.subject, Assessment.id).all()


def get_assessment(db: Session, assessment_id: int) -> Optional[Assessment]:
    return (
        db.query(Assessment)
        .options(selectinload(Assessment.questions))
        .filter(Assessment.id == assessment_id)
        .first()
    )


def get_assessment_by_slug(db: Session, slug: str) -> Optional[Assessment]:
    return db.query(Assessment).filter(Assessment.slug == slug).first()


def add_responses(db: Session, responses: List[Response]) -> None:
    """Insère les réponses d'une tentative (jamais modifiées ensuite). Pas de commit ici."""
    db.add_all(responses)


def get_user_responses(db: Session, user_id: int, assessment_id: Optional[int] = None) -> List[Response]:
    query = db.query(Response).filter(Response.user_id == user_id)
    if assessment_id is not None:
        query = query.filter(Response.assessment_id == assessment_id)
    return query.order_by(Response.created_at.asc(), Response.id.asc()).all()


def get_progress(db: Session, user_id: int, assessment_id: int) -> Optional[UserProgress]:
    return (
        db.query(UserProgress)
        .filter(UserProgress.user_id == user_id, UserProgress.assessment_id == assessment_id)
        .first()
    )


def upsert_progress(db: Session, user_id: int, assessment_id: int, *, score: int) -> UserProgress:
    """Marque l'évaluation comme terminée pour l'utilisateur (création ou mise à jour)."""
    progress = get_progress(db, user_id, assessment_id)
    if progress is None:
        progress = UserProgress(user_id=user_id, assessment_id=assessment_id)
        db.add(progress)
    progress.progress = 100
    progress.score = score
    progress.completed = True
    return progress


def list_user_progress(db: Session, user_id: int) -> List[UserProgress]:
    return (
        db.query(UserProgress)
        .options(selectinload(UserProgress.assessment))
        .filter(UserProgress.user_id == user_id)
        .order_by(UserProgress.updated_at.desc(), UserProgress.id.desc())
        .all()
    )


def count_completed(db: Session, user_id: int) -> int:
    return (
        db.query(UserProgress)
        .filter(UserProgress.user_id == user_id, UserProgress.completed.is_(True))
        .count()
    )
