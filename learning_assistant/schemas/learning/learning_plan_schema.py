from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime


class GeneratePlanRequest(BaseModel):
    question: Optional[str] = None


class AssessmentPlanRequest(BaseModel):
    assessmentResult: Optional[Dict[str, Any]] = None


class LearningPlanCreate(BaseModel):
    topic: str = Field(min_length=1, max_length=255)
    current_level: str = "beginner"
    goals: Optional[str] = None


class ResourceToggle(BaseModel):
    topic_index: int = Field(ge=0)
    resource_id: str


class LearningPlan(BaseModel):
    id: int
    user_id: int
    topic: str
    plan_data: Dict[str, Any]
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
