from fastapi import APIRouter

from .endpoints import (
    achievement_router,
    assessment_router,
    auth_router,
    chat_router,
    learning_plan_router,
    progress_router,
    quiz_router,
    rag_router,
    user_router,
)

api_router = APIRouter()

api_router.include_router(auth_router.router, prefix="/auth", tags=["Auth"])
api_router.include_router(user_router.router, prefix="/users", tags=["Users"])
api_router.include_router(quiz_router.router, prefix="/quiz", tags=["Quiz"])
api_router.include_router(rag_router.router, prefix="/rag", tags=["Chat"])
api_router.include_router(chat_router.router, prefix="/chat", tags=["Chat"])
api_router.include_router(learning_plan_router.router, tags=["Learning"])
api_router.include_router(assessment_router.router, prefix="/assessments", tags=["Assessments"])
api_router.include_router(progress_router.router, prefix="/progress", tags=["Progress"])
api_router.include_router(achievement_router.router, prefix="/achievements", tags=["Progress"])
