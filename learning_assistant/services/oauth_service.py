"""
Connexion via un fournisseur OAuth 2.0 externe (flux 'authorization code').

Le fournisseur est entièrement décrit par la configuration (``OAUTH_*``) :
URL d'autorisation, échange du code au ``token endpoint`` puis lecture du
profil au ``userinfo endpoint``.
"""
import logging
import secrets
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import requests

from learning_assistant.core.config import settings

logger = logging.getLogger(__name__)


class OAuthError(Exception):
    """Échec de l'échange OAuth (code invalide, fournisseur indisponible, profil incomplet)."""


@dataclass(frozen=True)
class OAuthIdentity:
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


def new_state() -> str:
    return secrets.token_urlsafe(24)


def build_authorize_url(redirect_uri: str, state: str) -> str:
    params = {
        "response_type": "code",
        "client_id": settings.OAUTH_CLIENT_ID,
        "redirect_uri": redirect_uri,
        "scope": settings.OAUTH_SCOPE,
        "state": state,
    }
    base = str(settings.OAUTH_AUTHORIZE_URL)
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{urlencode(params)}"


def _exchange_code_for_token(code: str, redirect_uri: str) -> str:
    try:
        response = requests.post(
            str(settings.OAUTH_TOKEN_URL),
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri,
                "client_id": settings.OAUTH_CLIENT_ID,
                "client_secret": settings.OAUTH_CLIENT_SECRET,
            },
            headers={"Accept": "application/json"},
            timeout=settings.OAUTH_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("Échange du code OAuth échoué: %s", exc)
        raise OAuthError("token_exchange_failed") from exc

    access_token = payload.get("access_token") if isinstance(payload, dict) else None
    if not access_token:
        logger.error("Réponse OAuth sans access_token: %s", payload)
        raise OAuthError("missing_access_token")
    return access_token


def _fetch_userinfo(access_token: str) -> dict:
    try:
        response = requests.get(
            str(settings.OAUTH_USERINFO_URL),
            headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
            timeout=settings.OAUTH_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("Lecture du profil OAuth échouée: %s", exc)
        raise OAuthError("userinfo_failed") from exc

    if not isinstance(payload, dict):
        raise OAuthError("userinfo_invalid")
    return payload


def exchange_code(code: str, redirect_uri: str) -> OAuthIdentity:
    """Échange ``code`` contre l'identité de l'utilisateur chez le fournisseur."""
    if not settings.oauth_enabled:
        raise OAuthError("oauth_not_configured")

    userinfo = _fetch_userinfo(_exchange_code_for_token(code, redirect_uri))
    email = (userinfo.get("email") or "").strip().lower()
    if not email:
        raise OAuthError("missing_email")

    return OAuthIdentity(
        email=email,
        full_name=userinfo.get("name") or userinfo.get("full_name"),
        avatar_url=userinfo.get("picture") or userinfo.get("avatar_url"),
    )
