import logging
import re
from typing import Generator, Optional
from urllib.parse import unquote

from fastapi import Depends, HTTPException, Request, status
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session
from starlette.datastructures import State

from learning_assistant.core import security
from learning_assistant.db import session as db_session
from learning_assistant.models.user.user_model import User

log = logging.getLogger(__name__)


def _get_state_container(request: Request | None) -> Optional[State]:
    if request is None:
        return None
    return request.state


def get_db(request: Request = None) -> Generator[Session, None, None]:  # type: ignore[assignment]
    """Session SQLAlchemy partagée pendant toute la requête.

    ``get_current_user`` et le handler demandent tous deux ``get_db`` : la
    session est mise en cache sur ``request.state`` avec un compteur de
    références, et n'est fermée qu'à la sortie de la dernière dépendance.
    Sans cela l'utilisateur authentifié serait détaché avant le handler.
    """

    state = _get_state_container(request)
    if state is None:
        db = db_session.SessionLocal()
        try:
            yield db
        finally:
            db.close()
        return

    db = getattr(state, "_db_session", None)
    if db is None:
        db = db_session.SessionLocal()
        setattr(state, "_db_session", db)
        setattr(state, "_db_refcount", 0)

    refcount = getattr(state, "_db_refcount", 0) + 1
    setattr(state, "_db_refcount", refcount)

    try:
        yield db
    finally:
        refcount = getattr(state, "_db_refcount", 1) - 1
        if refcount <= 0:
            try:
                db.close()
            finally:
                for attr in ("_db_session", "_db_refcount"):
                    if hasattr(state, attr):
                        delattr(state, attr)
        else:
            setattr(state, "_db_refcount", refcount)


def _normalize_token_value(raw_token: str | None) -> str | None:
    """Extrait un JWT 'propre' depuis un cookie, un header ou un paramètre.

    Accepte les valeurs entre guillemets, encodées (``Bearer%20…``) et les
    préfixes ``Bearer`` / ``Token`` quelle que soit la casse.
    """

    if raw_token is None:
        return None

    token = raw_token.strip().strip('"').strip("'")
    if not token:
        return None

    token = unquote(token)

    match = re.match(r"^(bearer|token)[\s,:]+(.+)$", token, flags=re.IGNORECASE)
    if match:
        token = match.group(2)

    token = token.strip()
    return token or None


def _decode_user_from_token(token: str | None, db: Session) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
    )

    token = _normalize_token_value(token)
    if not token:
        log.warning("Validation échouée: Pas de token fourni.")
        raise credentials_exception

    try:
        payload = jwt.decode(token, security.SECRET_KEY, algorithms=[security.ALGORITHM])
        user_id_str = payload.get("sub")
        if user_id_str is None:
            log.warning("Validation échouée: Le token ne contient pas de 'sub'.")
            raise credentials_exception

        user_id = int(user_id_str)
    except ExpiredSignatureError:
        log.warning("Validation échouée: Le token a expiré.")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="token_expired")
    except (JWTError, ValueError, TypeError):
        log.warning("Validation échouée: Le token est invalide ou mal formé.")
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        log.warning("Validation échouée: Utilisateur avec ID %s non trouvé.", user_id)
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="inactive_user")

    return user


def _token_candidates(request: Request) -> tuple[str | None, ...]:
    return (
        request.cookies.get(security.ACCESS_TOKEN_COOKIE),
        request.headers.get("Authorization"),
        request.headers.get("X-Access-Token"),
        request.query_params.get("access_token"),
    )


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    last_unauthorized_error: HTTPException | None = None

    for candidate in _token_candidates(request):
        token = _normalize_token_value(candidate)
        if not token:
            continue

        try:
            return _decode_user_from_token(token, db)
        except HTTPException as exc:
            if exc.status_code != status.HTTP_401_UNAUTHORIZED:
                raise
            last_unauthorized_error = exc

    if last_unauthorized_error is not None:
        raise last_unauthorized_error

    return _decode_user_from_token(None, db)


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """Comme ``get_current_user`` mais renvoie None pour un visiteur anonyme."""
    try:
        return get_current_user(request, db)
    except HTTPException as exc:
        if exc.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
            return None
        raise
