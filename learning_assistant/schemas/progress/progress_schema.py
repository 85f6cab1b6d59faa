from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime


class DashboardStats(BaseModel):
    assessmentsTaken: int = 0
    assessmentsCompleted: int = 0
    averageScore: int = 0
    totalQuestions: int = 0
    correctAnswers: int = 0
    plansCreated: int = 0
    resourcesCompleted: int = 0
    totalResources: int = 0
    studyTimeMinutes: int = 0
    learningStreak: int = 0


class RecentAssessment(BaseModel):
    id: int
    title: str
    score: int
    completedAt: Optional[datetime] = None
    knowledgeGaps: List[str] = []


class Skill(BaseModel):
    name: str
    proficiency: int
    lastPracticed: Optional[datetime] = None


class AchievementProgress(BaseModel):
    id: str
    title: str
    description: str
    progress: int
    maxProgress: int
    unlocked: bool
    unlockedAt: Optional[datetime] = None


class Dashboard(BaseModel):
    stats: DashboardStats
    recentAssessments: List[RecentAssessment] = []
    skills: List[Skill] = []
    achievements: List[AchievementProgress] = []


class Achievement(BaseModel):
    id: int
    achievement_type: str
    achievement_data: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True
