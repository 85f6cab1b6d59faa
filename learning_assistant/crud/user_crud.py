import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from learning_assistant.core.security import get_password_hash
from learning_assistant.models.user.user_model import AuthProvider, Profile, User
from learning_assistant.schemas.user.user_schema import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Récupère un utilisateur par son adresse email (insensible à la casse).

    Returns:
        L'objet User s'il est trouvé, sinon None.
    """
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(
    db: Session,
    user: UserCreate,
    *,
    is_superuser: bool = False,
) -> User:
    """Crée l'utilisateur seul ; le profil est créé à part (voir ``upsert_profile``)."""
    db_user = User(
        email=user.email.strip().lower(),
        hashed_password=get_password_hash(user.password),
        is_superuser=is_superuser,
        auth_provider=AuthProvider.PASSWORD,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def create_oauth_user(db: Session, email: str, full_name: Optional[str] = None) -> User:
    db_user = User(
        email=email.strip().lower(),
        hashed_password=None,
        auth_provider=AuthProvider.OAUTH,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    if full_name:
        try:
            upsert_profile(db, db_user, UserUpdate(full_name=full_name))
        except Exception:
            db.rollback()
            logger.exception("Création du profil OAuth échouée pour l'utilisateur %s", db_user.id)
    return db_user


def upsert_profile(db: Session, user: User, payload: UserUpdate) -> Profile:
    """Crée ou met à jour la ligne ``profiles`` de l'utilisateur."""
    profile = db.query(Profile).filter(Profile.user_id == user.id).first()
    if profile is None:
        profile = Profile(user_id=user.id)
        db.add(profile)

    if payload.full_name is not None:
        profile.full_name = payload.full_name.strip() or None
    if payload.avatar_url is not None:
        profile.avatar_url = payload.avatar_url.strip() or None

    db.commit()
    db.refresh(profile)
    db.refresh(user)
    return profile


def touch_last_login(db: Session, user: User) -> User:
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
