import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from learning_assistant.api.dependencies import get_db, get_optional_user
from learning_assistant.core import security
from learning_assistant.core.config import settings
from learning_assistant.crud import user_crud
from learning_assistant.models.user.user_model import User
from learning_assistant.schemas.user import user_schema
from learning_assistant.services import oauth_service

router = APIRouter()
logger = logging.getLogger(__name__)

OAUTH_STATE_KEY = "oauth_state"


def _frontend_url(path: str) -> str:
    return f"{str(settings.FRONTEND_BASE_URL).rstrip('/')}{path}"


def _set_auth_cookie(response: Response, access_token: str) -> None:
    # Front et back sur des domaines différents : SameSite=None
    response.set_cookie(
        key=security.ACCESS_TOKEN_COOKIE,
        value=access_token,
        httponly=True,
        samesite="none",
        secure=settings.ENVIRONMENT == "production",
        path="/",
        max_age=security.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/register", response_model=user_schema.User, status_code=status.HTTP_201_CREATED)
def register(user_in: user_schema.UserCreate, db: Session = Depends(get_db)):
    if user_crud.get_user_by_email(db, email=user_in.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = user_crud.create_user(db=db, user=user_in)

    # Le compte existe déjà : un échec sur le profil est seulement journalisé.
    try:
        user_crud.upsert_profile(db, user, user_schema.UserUpdate(full_name=user_in.full_name))
    except Exception:
        db.rollback()
        logger.exception("Création du profil échouée pour l'utilisateur %s", user.id)

    return user


@router.post("/login", response_model=user_schema.Token)
def login_for_access_token(
    response: Response,
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
):
    user = user_crud.get_user_by_email(db, email=form_data.username)
    if not user or not security.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Incorrect email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="inactive_user")

    user_crud.touch_last_login(db, user)
    access_token = security.create_access_token(subject=str(user.id))
    _set_auth_cookie(response, access_token)
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
def logout() -> JSONResponse:
    response = JSONResponse({"message": "Logout successful"})
    response.delete_cookie(
        key=security.ACCESS_TOKEN_COOKIE,
        path="/",
        samesite="none",
        secure=settings.ENVIRONMENT == "production",
    )
    return response


@router.get("/session", response_model=user_schema.SessionStatus)
def read_session(current_user: User | None = Depends(get_optional_user)):
    if current_user is None:
        return {"authenticated": False, "userId": None, "email": None}
    return {"authenticated": True, "userId": current_user.id, "email": current_user.email}


def _redirect_uri(request: Request) -> str:
    if settings.OAUTH_REDIRECT_URI:
        return str(settings.OAUTH_REDIRECT_URI)
    return str(request.url_for("oauth_callback"))


@router.get("/oauth")
def start_oauth(request: Request):
    if not settings.oauth_enabled:
        raise HTTPException(status_code=503, detail="oauth_not_configured")

    state = oauth_service.new_state()
    request.session[OAUTH_STATE_KEY] = state
    return RedirectResponse(oauth_service.build_authorize_url(_redirect_uri(request), state), status_code=302)


@router.get("/callback", name="oauth_callback")
def oauth_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    db: Session = Depends(get_db),
):
    error_redirect = RedirectResponse(_frontend_url("/auth-error"), status_code=302)
    if not code:
        logger.warning("Callback OAuth sans code.")
        return error_redirect

    expected_state = request.session.pop(OAUTH_STATE_KEY, None)
    if expected_state is None or not secrets.compare_digest(state or "", expected_state):
        logger.warning("Callback OAuth: state invalide.")
        return error_redirect

    try:
        identity = oauth_service.exchange_code(code, _redirect_uri(request))
    except oauth_service.OAuthError as exc:
        logger.warning("Échange OAuth échoué: %s", exc)
        return error_redirect

    user = user_crud.get_user_by_email(db, identity.email)
    if user is None:
        user = user_crud.create_oauth_user(db, identity.email, identity.full_name)
        logger.info("Utilisateur %s créé via OAuth.", user.id)
    if not user.is_active:
        return error_redirect

    user_crud.touch_last_login(db, user)
    response = RedirectResponse(_frontend_url("/dashboard"), status_code=302)
    _set_auth_cookie(response, security.create_access_token(subject=str(user.id)))
    return response
