from pydantic import BaseModel
from typing import Dict, List, Optional


class QuizQuestion(BaseModel):
    id: str
    question: str
    options: List[str]
    correctAnswer: str
    explanation: Optional[str] = None
    difficulty: str
    topics: List[str] = []


class QuizRequest(BaseModel):
    # Champs optionnels : l'absence est signalée par un 400 explicite
    topic: Optional[str] = None
    difficulty: Optional[str] = None
    count: Optional[int] = None


class Quiz(BaseModel):
    id: str
    title: str
    description: str
    questions: List[QuizQuestion]
    topic: str
    difficulty: str
    estimatedTime: int


class QuizEvaluationRequest(BaseModel):
    quizId: str
    quizTitle: Optional[str] = None
    topic: str
    # Toutes les questions du quiz, y compris celles restées sans réponse
    questionIds: List[str]
    answers: Dict[str, Optional[str]] = {}


class KnowledgeGap(BaseModel):
    topic: str
    missed: int
    confidence: int
    questionIds: List[str]


class GradedAnswer(BaseModel):
    questionId: str
    selectedOption: Optional[str] = None
    correctAnswer: str
    isCorrect: bool
    topics: List[str] = []
    explanation: Optional[str] = None


class AssessmentResult(BaseModel):
    userId: str
    quizId: str
    quizTitle: str = ""
    topic: str
    score: int
    correctAnswers: int
    totalQuestions: int
    skillLevel: str
    knowledgeGaps: List[KnowledgeGap]
    answers: List[GradedAnswer] = []
    completedAt: str


class RagRequest(BaseModel):
    question: Optional[str] = None
    topic: Optional[str] = "python"


class Source(BaseModel):
    title: str
    url: str
    snippet: str


class RagResponse(BaseModel):
    answer: str
    sources: List[Source]


class ExplainRequest(BaseModel):
    concept: Optional[str] = None
    currentLevel: Optional[str] = None
    topic: Optional[str] = None


class ExplainResponse(BaseModel):
    explanation: str
    sources: List[Source] = []
    source: str
