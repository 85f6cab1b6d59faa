from sqlalchemy import Integer, Text, Boolean, ForeignKey, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from learning_assistant.db.base_class import Base
from typing import Optional, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from ..user.user_model import User
    from .assessment_model import Assessment, Question


class Response(Base):
    """
    Une ligne par réponse soumise (utilisateur, question).
    Créée une seule fois, jamais modifiée ni supprimée.
    """
    __tablename__ = "responses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    question_id: Mapped[int] = mapped_column(Integer, ForeignKey("questions.id"), index=True)
    assessment_id: Mapped[int] = mapped_column(Integer, ForeignKey("assessments.id"), index=True)
    answered_option: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user: Mapped["User"] = relationship(back_populates="responses")
    question: Mapped["Question"] = relationship()
    assessment: Mapped["Assessment"] = relationship()
