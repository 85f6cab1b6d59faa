# Fichier: learning_assistant/core/config.py
from pydantic_settings import BaseSettings
from typing import Optional, List
from pydantic import AnyHttpUrl, ValidationError, field_validator
import sys

class Settings(BaseSettings):
    DATABASE_URL: str

    # La clé secrète pour signer les JWTs.
    SECRET_KEY: str

    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.7

    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
    ]
    BACKEND_CORS_ORIGIN_REGEXES: List[str] = []

    FRONTEND_BASE_URL: AnyHttpUrl = "http://localhost:3000"

    # --- Auth configuration ---
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # --- OAuth (fournisseur externe) ---
    OAUTH_CLIENT_ID: str | None = None
    OAUTH_CLIENT_SECRET: str | None = None
    OAUTH_AUTHORIZE_URL: AnyHttpUrl | None = None
    OAUTH_TOKEN_URL: AnyHttpUrl | None = None
    OAUTH_USERINFO_URL: AnyHttpUrl | None = None
    OAUTH_REDIRECT_URI: AnyHttpUrl | None = None
    OAUTH_SCOPE: str = "openid email profile"
    OAUTH_TIMEOUT_SECONDS: float = 10.0

    # Back-office
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    # Performance instrumentation
    SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS: int = 300

    # Catalogue de quiz
    SEED_ASSESSMENTS_ON_STARTUP: bool = True
    DEFAULT_QUIZ_QUESTION_COUNT: int = 5

    ENVIRONMENT: str = "development"

    class Config:
        env_file = ".env"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        """Ensure Postgres URLs always use the asyncpg driver.

        Managed Postgres providers still expose database URLs using the legacy
        ``postgres://`` scheme, which SQLAlchemy no longer understands. Those
        URLs (and ``postgresql://`` / psycopg variants) are upgraded to
        ``postgresql+asyncpg://`` so the async engine boots. SQLite and other
        backends are left untouched.
        """

        if not isinstance(value, str):
            return value

        if "+asyncpg" in value:
            return value

        replacements = {
            "postgres://": "postgresql+asyncpg://",
            "postgresql://": "postgresql+asyncpg://",
            "postgresql+psycopg2://": "postgresql+asyncpg://",
            "postgresql+psycopg://": "postgresql+asyncpg://",
        }

        for prefix, target in replacements.items():
            if value.startswith(prefix):
                return target + value[len(prefix) :]

        return value

    @property
    def oauth_enabled(self) -> bool:
        return bool(
            self.OAUTH_CLIENT_ID
            and self.OAUTH_CLIENT_SECRET
            and self.OAUTH_AUTHORIZE_URL
            and self.OAUTH_TOKEN_URL
            and self.OAUTH_USERINFO_URL
        )

def _log_settings_validation_error(exc: ValidationError) -> None:
    """Pretty-print missing or invalid environment variables.

    The exception bubbles up during module import, which makes it hard to spot
    the faulty variable in server logs. The structured payload is printed
    before the exception is re-raised.
    """

    header = "Configuration error while loading environment variables:"
    print(header, file=sys.stderr)

    details = exc.errors()

    if details:
        for error in details:
            location = ".".join(str(part) for part in error.get("loc", ()))
            message = error.get("msg", "Unknown validation error")
            type_name = error.get("type")
            hint_parts = [message]
            if type_name:
                hint_parts.append(f"(type={type_name})")
            hint = " ".join(hint_parts)
            print(f"  - {location}: {hint}", file=sys.stderr)
    else:
        print(exc, file=sys.stderr)


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
