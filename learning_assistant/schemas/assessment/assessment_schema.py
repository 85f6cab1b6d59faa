from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import datetime

from learning_assistant.catalog.levels import Difficulty


class QuestionPublic(BaseModel):
    """Question sans la bonne réponse ni l'explication."""
    id: int
    slug: str
    question: str
    options: List[str]
    difficulty: Difficulty
    topics: List[str] = []
    position: int

    class Config:
        from_attributes = True


class AssessmentSummary(BaseModel):
    id: int
    slug: str
    title: str
    description: Optional[str] = None
    subject: str
    difficulty: Difficulty
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AssessmentDetail(AssessmentSummary):
    questions: List[QuestionPublic] = []


class AssessmentSubmission(BaseModel):
    # Clé : slug de la question (ex: "py-b-1"), valeur : option choisie
    answers: Dict[str, Optional[str]]


class AssessmentStats(BaseModel):
    total: int
    correct: int
    incorrect: int
    score: int


class AssessmentResults(BaseModel):
    assessmentId: int
    title: str
    stats: AssessmentStats
    knowledgeGaps: List[Dict[str, object]] = []
    analysis: str
    completedAt: Optional[datetime] = None
