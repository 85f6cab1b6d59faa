from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learning_assistant.api.dependencies import get_current_user, get_db
from learning_assistant.crud import user_crud
from learning_assistant.models.user.user_model import User
from learning_assistant.schemas.user import user_schema

router = APIRouter()


@router.get("/me", response_model=user_schema.User)
def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=user_schema.User)
def update_me(
    payload: user_schema.UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Met à jour le profil (nom complet, avatar). La ligne ``profiles`` est créée au besoin."""
    user_crud.upsert_profile(db, current_user, payload)
    return current_user
