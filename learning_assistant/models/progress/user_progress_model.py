from sqlalchemy import Integer, Boolean, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from learning_assistant.db.base_class import Base
from typing import TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from ..user.user_model import User
    from ..assessment.assessment_model import Assessment


class UserProgress(Base):
    """Agrégat par (utilisateur, évaluation), mis à jour à chaque complétion."""
    __tablename__ = "user_progress"
    __table_args__ = (UniqueConstraint("user_id", "assessment_id", name="uq_user_progress_user_assessment"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    assessment_id: Mapped[int] = mapped_column(Integer, ForeignKey("assessments.id"), index=True)
    progress: Mapped[int] = mapped_column(Integer, default=0)
    score: Mapped[int] = mapped_column(Integer, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user: Mapped["User"] = relationship(back_populates="progress_entries")
    assessment: Mapped["Assessment"] = relationship()
