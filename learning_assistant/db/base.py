"""Déclare l'ensemble des modèles SQLAlchemy pour ``Base.metadata.create_all``."""

from learning_assistant.db.base_class import Base

# Utilisateurs & profils
from learning_assistant.models.user.user_model import User, Profile
from learning_assistant.models.user.achievement_model import Achievement

# Catalogue d'évaluations
from learning_assistant.models.assessment.assessment_model import Assessment, Question
from learning_assistant.models.assessment.response_model import Response

# Progression & plans
from learning_assistant.models.progress.user_progress_model import UserProgress
from learning_assistant.models.learning.learning_plan_model import LearningPlan

__all__ = [
    "Base",
    "User",
    "Profile",
    "Achievement",
    "Assessment",
    "Question",
    "Response",
    "UserProgress",
    "LearningPlan",
]
