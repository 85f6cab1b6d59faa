from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learning_assistant.api.dependencies import get_current_user, get_db
from learning_assistant.models.user.user_model import User
from learning_assistant.schemas.progress import progress_schema
from learning_assistant.services.progress_service import ProgressService

router = APIRouter()


@router.get("", response_model=progress_schema.Dashboard)
def read_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Statistiques, évaluations récentes, compétences et succès de l'utilisateur."""
    return ProgressService(db, current_user.id).get_dashboard()
