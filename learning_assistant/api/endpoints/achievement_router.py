from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learning_assistant.api.dependencies import get_current_user, get_db
from learning_assistant.crud import achievement_crud
from learning_assistant.models.user.user_model import User
from learning_assistant.schemas.progress import progress_schema

router = APIRouter()


@router.get("", response_model=List[progress_schema.Achievement])
def list_my_achievements(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return achievement_crud.list_achievements(db, current_user.id)
