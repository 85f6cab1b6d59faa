from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from learning_assistant.models.learning.learning_plan_model import LearningPlan


def list_plans(db: Session, user_id: int) -> List[LearningPlan]:
    return (
        db.query(LearningPlan)
        .filter(LearningPlan.user_id == user_id)
        .order_by(LearningPlan.created_at.desc(), LearningPlan.id.desc())
        .all()
    )


def get_plan(db: Session, user_id: int, plan_id: int) -> Optional[LearningPlan]:
    """Un plan n'est visible que par son propriétaire."""
    return (
        db.query(LearningPlan)
        .filter(LearningPlan.id == plan_id, LearningPlan.user_id == user_id)
        .first()
    )


def create_plan(db: Session, user_id: int, topic: str, plan_data: Dict[str, Any]) -> LearningPlan:
    plan = LearningPlan(user_id=user_id, topic=topic, plan_data=plan_data)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def replace_plan_data(db: Session, plan: LearningPlan, plan_data: Dict[str, Any]) -> LearningPlan:
    # Réassignation complète : la colonne JSON n'est pas mutable-tracked.
    plan.plan_data = plan_data
    db.commit()
    db.refresh(plan)
    return plan


def delete_plan(db: Session, plan: LearningPlan) -> None:
    db.delete(plan)
    db.commit()
