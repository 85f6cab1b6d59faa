"""Configuration du back-office SQLAdmin."""

from __future__ import annotations

import json
from typing import Any

from markupsafe import Markup
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from learning_assistant.core.security import verify_password
from learning_assistant.db import session as db_session
from learning_assistant.models.assessment.assessment_model import Assessment, Question
from learning_assistant.models.assessment.response_model import Response
from learning_assistant.models.learning.learning_plan_model import LearningPlan
from learning_assistant.models.progress.user_progress_model import UserProgress
from learning_assistant.models.user.achievement_model import Achievement
from learning_assistant.models.user.user_model import User


def _json_preview(value: Any, *, max_chars: int = 160) -> Markup:
    """Affiche un contenu JSON tronqué dans un bloc <pre>."""
    if value in (None, ""):
        return Markup("<span style='color:#9ca3af;'>-</span>")

    if isinstance(value, (dict, list)):
        text = json.dumps(value, ensure_ascii=False, indent=2)
    else:
        text = str(value)

    if len(text) > max_chars:
        text = text[:max_chars] + "…"

    return Markup(
        "<pre style='max-width:520px; white-space:pre-wrap; margin:0; font-size:12px;'>{}</pre>"
    ).format(text)


class AdminAuth(AuthenticationBackend):
    """Seuls les superutilisateurs actifs accèdent au back-office."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = str(form.get("username") or "").strip().lower()
        password = form.get("password")

        with db_session.SessionLocal() as db:
            user = db.query(User).filter(User.email == email).first()

        if user and user.is_active and user.is_superuser and verify_password(password, user.hashed_password):
            request.session.update({"token": "admin_logged_in", "user": user.email})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return "token" in request.session


class UserAdmin(ModelView, model=User):
    name = "Utilisateur"
    name_plural = "Utilisateurs"
    icon = "fa-solid fa-user"
    category = "Utilisateurs"
    column_list = [
        User.id,
        User.email,
        User.auth_provider,
        User.is_active,
        User.is_superuser,
        User.created_at,
        User.last_login_at,
    ]
    column_searchable_list = [User.email]
    column_sortable_list = [User.created_at, User.last_login_at]
    column_default_sort = [(User.created_at, True)]
    column_labels = {User.last_login_at: "Dernière connexion", User.auth_provider: "Connexion"}
    column_details_exclude_list = [User.hashed_password]
    form_excluded_columns = ["hashed_password", "responses", "progress_entries", "learning_plans", "achievements"]
    can_export = True
    page_size = 50


class AssessmentAdmin(ModelView, model=Assessment):
    name = "Évaluation"
    name_plural = "Évaluations"
    icon = "fa-solid fa-clipboard-check"
    category = "Catalogue"
    column_list = [Assessment.id, Assessment.slug, Assessment.title, Assessment.subject, Assessment.difficulty]
    column_searchable_list = [Assessment.slug, Assessment.title]
    # Le catalogue est pré-rempli au démarrage
    can_create = False
    can_delete = False


class QuestionAdmin(ModelView, model=Question):
    name = "Question"
    name_plural = "Questions"
    icon = "fa-solid fa-circle-question"
    category = "Catalogue"
    column_list = [Question.id, Question.assessment, Question.slug, Question.question, Question.difficulty, Question.topics]
    column_searchable_list = [Question.slug, Question.question]
    column_formatters = {Question.topics: lambda m, _: _json_preview(m.topics, max_chars=80)}
    can_create = False
    can_delete = False


class ResponseAdmin(ModelView, model=Response):
    name = "Réponse"
    name_plural = "Réponses"
    icon = "fa-solid fa-comments"
    category = "Apprentissage"
    column_list = [Response.user, Response.question, Response.answered_option, Response.is_correct, Response.created_at]
    column_default_sort = [(Response.created_at, True)]
    # Journal append-only
    can_create = False
    can_edit = False
    can_export = True


class UserProgressAdmin(ModelView, model=UserProgress):
    name = "Progression"
    name_plural = "Progressions"
    icon = "fa-solid fa-chart-line"
    category = "Apprentissage"
    column_list = [
        UserProgress.user,
        UserProgress.assessment,
        UserProgress.score,
        UserProgress.completed,
        UserProgress.updated_at,
    ]
    can_export = True


class LearningPlanAdmin(ModelView, model=LearningPlan):
    name = "Plan d'apprentissage"
    name_plural = "Plans d'apprentissage"
    icon = "fa-solid fa-route"
    category = "Apprentissage"
    column_list = [LearningPlan.id, LearningPlan.user, LearningPlan.topic, LearningPlan.created_at, LearningPlan.updated_at]
    column_searchable_list = [LearningPlan.topic]
    column_formatters_detail = {LearningPlan.plan_data: lambda m, _: _json_preview(m.plan_data, max_chars=10000)}
    can_export = True


class AchievementAdmin(ModelView, model=Achievement):
    name = "Succès"
    name_plural = "Succès"
    icon = "fa-solid fa-trophy"
    category = "Utilisateurs"
    column_list = [Achievement.user, Achievement.achievement_type, Achievement.achievement_data, Achievement.created_at]
    column_formatters = {Achievement.achievement_data: lambda m, _: _json_preview(m.achievement_data)}
    column_default_sort = [(Achievement.created_at, True)]
    can_create = False
    can_edit = False


ADMIN_VIEWS = (
    UserAdmin,
    AssessmentAdmin,
    QuestionAdmin,
    ResponseAdmin,
    UserProgressAdmin,
    LearningPlanAdmin,
    AchievementAdmin,
)


def setup_admin(app, secret_key: str) -> Admin:
    admin = Admin(
        app,
        db_session.async_engine,
        authentication_backend=AdminAuth(secret_key=secret_key),
        base_url="/admin",
        title="Learning Assistant Admin",
    )
    for view in ADMIN_VIEWS:
        admin.add_view(view)
    return admin
