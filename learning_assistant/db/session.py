"""Database engines and session factory.

Both an asynchronous engine (used at startup for ``create_all`` and by the
back office) and a synchronous engine (used by the API routers) are built
from the same ``DATABASE_URL``. Local development falls back to SQLite when
the configured database cannot be reached.
"""

from __future__ import annotations

import logging
import os
import ssl
from time import perf_counter
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import ArgumentError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker

from learning_assistant.core.config import settings

logger = logging.getLogger(__name__)

SQLITE_FALLBACK_URL = "sqlite+aiosqlite:///./learning_assistant_local.db"

_SSL_MODES_WITH_TLS = {"allow", "prefer", "require", "verify-ca", "verify-full"}

# Populated by ``configure_database``.
async_engine: AsyncEngine
sync_engine: Engine
SessionLocal: sessionmaker


def _asyncpg_ssl_argument(mode: str, root_cert: str | None) -> ssl.SSLContext | bool:
    """Translate a libpq ``sslmode`` into the ``ssl`` argument asyncpg expects."""

    if mode == "disable":
        return False

    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    if root_cert:
        context.load_verify_locations(cafile=root_cert)

    if mode in {"verify-ca", "verify-full"}:
        context.check_hostname = mode == "verify-full"
    else:
        # require/prefer/allow: chiffrement sans validation du certificat.
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def _prepare_async_connection(url: str) -> tuple[str, dict[str, Any]]:
    """Remove the libpq-only query parameters asyncpg rejects."""

    try:
        parsed_url = make_url(url)
    except ArgumentError:
        return url, {}

    if not parsed_url.drivername.startswith("postgresql+asyncpg"):
        return url, {}

    query = dict(parsed_url.query)
    sslmode = query.pop("sslmode", None)
    sslrootcert = query.pop("sslrootcert", None)

    connect_args: dict[str, Any] = {}
    if isinstance(sslmode, str):
        mode = sslmode.lower()
        if mode == "disable" or mode in _SSL_MODES_WITH_TLS:
            connect_args["ssl"] = _asyncpg_ssl_argument(mode, sslrootcert)
    elif sslrootcert:
        connect_args["ssl"] = _asyncpg_ssl_argument("verify-ca", sslrootcert)

    return parsed_url.set(query=query).render_as_string(hide_password=False), connect_args


def _sync_url_for(async_url: str) -> tuple[str, dict[str, Any]]:
    """Return the synchronous driver URL matching *async_url*."""

    parsed_url = make_url(async_url)
    drivername = parsed_url.drivername
    connect_args: dict[str, Any] = {}

    if drivername.startswith("postgresql+"):
        # postgresql+asyncpg -> postgresql+psycopg pour le travail synchrone.
        parsed_url = parsed_url.set(drivername="postgresql+psycopg")
    elif drivername == "sqlite+aiosqlite":
        parsed_url = parsed_url.set(drivername="sqlite")
        connect_args["check_same_thread"] = False

    return parsed_url.render_as_string(hide_password=False), connect_args


def _sqlite_fallback_allowed() -> bool:
    if os.getenv("DISABLE_SQLITE_FALLBACK") == "1":
        return False
    return (settings.ENVIRONMENT or "").lower() in {"development", "local"}


def _install_slow_query_logger(engine: Engine) -> None:
    """Warn when a statement runs longer than ``SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS``."""

    threshold_ms = max(settings.SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS or 0, 0)
    if threshold_ms == 0 or getattr(engine, "_la_slow_query_hook", False):
        return
    engine._la_slow_query_hook = True

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        context._la_query_start = perf_counter()

    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start = getattr(context, "_la_query_start", None)
        if start is None:
            return

        elapsed_ms = (perf_counter() - start) * 1000.0
        if elapsed_ms < threshold_ms:
            return

        snippet = " ".join(str(statement).split())
        if len(snippet) > 200:
            snippet = snippet[:197] + "..."
        logger.warning("SQL lente (%.1f ms) - %s", elapsed_ms, snippet)

    event.listen(engine, "before_cursor_execute", _before_cursor_execute)
    event.listen(engine, "after_cursor_execute", _after_cursor_execute)


def _ping(engine: Engine) -> None:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def configure_database(database_url: str | None = None, *, allow_fallback: bool = True) -> None:
    """Build the engines and the ``SessionLocal`` factory.

    ``database_url`` defaults to ``settings.DATABASE_URL``. When the database is
    unreachable in development, the application switches to a local SQLite
    file instead of failing at import time.
    """

    global async_engine, sync_engine, SessionLocal

    target_url = str(database_url or settings.DATABASE_URL)
    async_url, async_connect_args = _prepare_async_connection(target_url)
    logger.info("Configuration de la base de données: %s", make_url(async_url).render_as_string(hide_password=True))

    candidate_async_engine = create_async_engine(async_url, echo=False, connect_args=async_connect_args)

    sync_url, sync_connect_args = _sync_url_for(async_url)
    candidate_sync_engine = create_engine(sync_url, pool_pre_ping=True, connect_args=sync_connect_args)

    _install_slow_query_logger(candidate_sync_engine)
    _install_slow_query_logger(candidate_async_engine.sync_engine)

    try:
        _ping(candidate_sync_engine)
    except (OperationalError, OSError) as exc:
        if allow_fallback and _sqlite_fallback_allowed():
            logger.warning(
                "Impossible de joindre la base de données (%s). Bascule automatique vers SQLite.",
                exc,
            )
            candidate_sync_engine.dispose()
            candidate_async_engine.sync_engine.dispose()
            configure_database(SQLITE_FALLBACK_URL, allow_fallback=False)
            return

        logger.error("Connexion à la base de données échouée: %s", exc)
        raise

    async_engine = candidate_async_engine
    sync_engine = candidate_sync_engine
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sync_engine)


# Les moteurs sont prêts dès l'import du module.
configure_database()
