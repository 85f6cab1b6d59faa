"""Utility helpers for test factories."""

from __future__ import annotations

from datetime import datetime, timezone

from starlette.requests import Request

from learning_assistant.core.security import get_password_hash
from learning_assistant.db.initial_data import seed_assessments
from learning_assistant.models.assessment.assessment_model import Assessment
from learning_assistant.models.user.user_model import User


def create_user(db, password: str | None = None, **kwargs) -> User:
    defaults = {
        "email": "user@example.com",
        "hashed_password": get_password_hash(password) if password else "x",
        "is_active": True,
        "is_superuser": False,
        "created_at": datetime.now(timezone.utc),
    }
    defaults.update(kwargs)
    user = User(**defaults)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def seeded_assessment(db, slug: str = "python-beginner") -> Assessment:
    seed_assessments(db)
    return db.query(Assessment).filter(Assessment.slug == slug).one()


def correct_answers(assessment: Assessment) -> dict[str, str]:
    return {question.slug: question.correct_answer for question in assessment.questions}


def build_request(
    *,
    cookies: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    query_string: str = "",
    session: dict | None = None,
    path: str = "/",
) -> Request:
    """Construit une requête Starlette minimale pour appeler les dépendances directement."""
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    if cookies:
        cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
        raw_headers.append((b"cookie", cookie_header.encode()))
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": raw_headers,
        "query_string": query_string.encode(),
        "session": session if session is not None else {},
        "state": {},
    }
    return Request(scope)
