from sqlalchemy import Integer, String, Text, JSON, ForeignKey, DateTime, func, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from learning_assistant.db.base_class import Base
from learning_assistant.catalog.levels import Difficulty
from typing import List, Optional
from datetime import datetime


def _difficulty_column():
    return Enum(Difficulty, name="difficulty", values_callable=lambda obj: [e.value for e in obj])


class Assessment(Base):
    """Évaluation pré-remplie (une par sujet et niveau), immuable depuis l'API."""
    __tablename__ = "assessments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    subject: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    difficulty: Mapped[Difficulty] = mapped_column(_difficulty_column(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    questions: Mapped[List["Question"]] = relationship(
        back_populates="assessment",
        cascade="all, delete-orphan",
        order_by="Question.position",
    )


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    assessment_id: Mapped[int] = mapped_column(Integer, ForeignKey("assessments.id", ondelete="CASCADE"), index=True)
    # Identifiant du catalogue statique (ex: "py-b-1")
    slug: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    difficulty: Mapped[Difficulty] = mapped_column(_difficulty_column(), nullable=False)
    topics: Mapped[List[str]] = mapped_column(JSON, default=list)
    position: Mapped[int] = mapped_column(Integer, default=0)

    assessment: Mapped["Assessment"] = relationship(back_populates="questions")
