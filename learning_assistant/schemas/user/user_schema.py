from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from learning_assistant.models.user.user_model import AuthProvider


# --- Schéma de Base ---
class UserBase(BaseModel):
    email: EmailStr


# --- Création (POST /auth/register) ---
class UserCreate(UserBase):
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


# --- Mise à jour du profil (PATCH /users/me) ---
class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class Profile(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Réponse de l'API ---
# Pas de mot de passe ici.
class User(UserBase):
    id: int
    is_active: bool
    is_superuser: bool
    auth_provider: AuthProvider = AuthProvider.PASSWORD
    created_at: datetime
    last_login_at: Optional[datetime] = None
    display_name: str
    profile: Optional[Profile] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SessionStatus(BaseModel):
    authenticated: bool
    userId: Optional[int] = None
    email: Optional[str] = None
