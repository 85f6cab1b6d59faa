import logging
import os
import re

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

# Imports de l'application
from learning_assistant.core.config import settings
from learning_assistant.db.base import Base
from learning_assistant.db import session as db_session
from learning_assistant.db.initial_data import seed_assessments
from learning_assistant.api.api import api_router
from learning_assistant.admin import setup_admin
from learning_assistant.core.security import get_password_hash
from learning_assistant.models.user.user_model import User

# --- Configuration du logging ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Initialisation de l'application FastAPI ---
app = FastAPI(
    title="AI Learning Assistant API",
    openapi_url="/api/openapi.json",
)


def _sanitize_origin(origin: str | None) -> str | None:
    if not origin:
        return None
    value = origin.strip()
    if not value:
        return None
    if not value.startswith("http"):
        value = f"https://{value}"
    return value.rstrip("/")


def _compile_origin_regex(patterns: set[str]) -> re.Pattern[str] | None:
    valid_patterns: list[str] = []
    for pattern in sorted(patterns):
        candidate = pattern.strip()
        if not candidate:
            continue

        try:
            re.compile(candidate)
        except re.error as exc:
            logger.warning("Regex CORS ignorée (invalide): %s (%s)", candidate, exc)
            continue

        valid_patterns.append(candidate)

    if not valid_patterns:
        return None

    if len(valid_patterns) == 1:
        return re.compile(valid_patterns[0])

    return re.compile("|".join(f"(?:{pattern})" for pattern in valid_patterns))


def _build_cors_config() -> tuple[list[str], re.Pattern[str] | None]:
    base_origins = {_sanitize_origin(o) for o in settings.BACKEND_CORS_ORIGINS}
    base_origins.add(_sanitize_origin(str(settings.FRONTEND_BASE_URL)))
    base_origins.add(_sanitize_origin(os.getenv("VERCEL_URL")))

    additional = os.getenv("ADDITIONAL_CORS_ORIGINS")
    if additional:
        for origin in additional.split(","):
            base_origins.add(_sanitize_origin(origin))

    allow_origins = sorted({origin for origin in base_origins if origin})

    regex_candidates = {pattern.strip() for pattern in settings.BACKEND_CORS_ORIGIN_REGEXES if pattern and pattern.strip()}
    if any("vercel.app" in origin for origin in allow_origins):
        regex_candidates.add(r"^https://.*\.vercel\.app$")

    allow_origin_regex = _compile_origin_regex(regex_candidates)

    logger.info("CORS origins configurés: %s", allow_origins)
    if allow_origin_regex is not None:
        logger.info("CORS regex configurés: %s", allow_origin_regex.pattern)

    return allow_origins, allow_origin_regex


# --- Configuration des Middlewares ---
# La session sert au back-office et au 'state' OAuth.
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)

cors_origins, cors_regex = _build_cors_config()
cors_kwargs: dict[str, object] = {
    "allow_origins": cors_origins,
    "allow_credentials": True,
    "allow_methods": ["*"],
    "allow_headers": sorted({"Authorization", "Content-Type", "X-Access-Token"}),
}
if cors_regex is not None:
    cors_kwargs["allow_origin_regex"] = cors_regex.pattern

app.add_middleware(CORSMiddleware, **cors_kwargs)

# --- Admin & routes ---
admin = setup_admin(app, settings.SECRET_KEY)
app.include_router(api_router, prefix="/api")


def ensure_default_admin() -> None:
    """Crée le superutilisateur du back-office si ADMIN_EMAIL et ADMIN_PASSWORD sont définis."""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD absents : pas d'administrateur par défaut.")
        return

    email = settings.ADMIN_EMAIL.strip().lower()
    with db_session.SessionLocal() as session:
        admin_user = session.query(User).filter(User.email == email).first()
        if admin_user is not None:
            logger.info("Administrateur par défaut déjà présent.")
            return

        session.add(
            User(
                email=email,
                hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
                is_superuser=True,
                is_active=True,
            )
        )
        session.commit()
        logger.info("✅ Administrateur par défaut '%s' créé.", email)


# --- Événement de Démarrage ---
@app.on_event("startup")
async def startup():
    logger.info("Vérification et création des tables de la base de données...")
    async with db_session.async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Les tables de la base de données sont prêtes.")

    if settings.SEED_ASSESSMENTS_ON_STARTUP:
        with db_session.SessionLocal() as session:
            seed_assessments(session)

    ensure_default_admin()


# --- Route Racine ---
@app.get("/")
def read_root():
    return {"message": "Welcome to the AI Learning Assistant API!"}
