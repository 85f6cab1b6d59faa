import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from learning_assistant.models.user.achievement_model import Achievement

logger = logging.getLogger(__name__)


def list_achievements(db: Session, user_id: int) -> List[Achievement]:
    return (
        db.query(Achievement)
        .filter(Achievement.user_id == user_id)
        .order_by(Achievement.created_at.asc(), Achievement.id.asc())
        .all()
    )


def get_first_of_type(db: Session, user_id: int, achievement_type: str) -> Optional[Achievement]:
    return (
        db.query(Achievement)
        .filter(Achievement.user_id == user_id, Achievement.achievement_type == achievement_type)
        .order_by(Achievement.created_at.asc(), Achievement.id.asc())
        .first()
    )


def has_achievement(db: Session, user_id: int, achievement_type: str) -> bool:
    return get_first_of_type(db, user_id, achievement_type) is not None


def record_achievement(
    db: Session,
    user_id: int,
    achievement_type: str,
    data: Optional[Dict[str, Any]] = None,
) -> Achievement:
    """Ajoute une entrée au journal des succès."""
    achievement = Achievement(user_id=user_id, achievement_type=achievement_type, achievement_data=data or {})
    db.add(achievement)
    db.commit()
    db.refresh(achievement)
    logger.info("Succès '%s' enregistré pour l'utilisateur %s", achievement_type, user_id)
    return achievement
