"""
Auth routes.

- GET /api/auth/profile: caller identity plus profile row (created on first call)
- GET /auth/callback: authorization code exchange, then redirect into the site
"""

import logging
from typing import Any
from urllib.parse import urljoin

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from okit_boost.api.deps import get_account_service, get_config, get_optional_user
from okit_boost.api.responses import error, unauthenticated
from okit_boost.components.accounts import AccountService
from okit_boost.config.models import AppConfig
from okit_boost.domain.entities import AuthUser
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()
callback_router = APIRouter()


def safe_next_path(candidate: str | None, default: str) -> str:
    """Accept only same-site absolute paths; anything else falls back to default."""
    if not candidate or not candidate.startswith("/") or candidate.startswith("//"):
        return default
    if "\\" in candidate:
        return default
    return candidate


@router.get("/profile", response_model=None)
def get_profile(
    user: AuthUser | None = Depends(get_optional_user),
    accounts: AccountService = Depends(get_account_service),
) -> dict[str, Any] | JSONResponse:
    if user is None:
        return unauthenticated()
    try:
        profile = accounts.get_or_create_profile(user)
    except RemoteServiceError:
        logger.exception("Profile fetch/create failed for %s", user.id)
        return error("Erreur lors de la récupération du profil")
    return {
        "user": {"id": user.id, "email": user.email, "user_metadata": user.user_metadata},
        "profile": profile,
    }


@callback_router.get("/callback")
def auth_callback(
    request: Request,
    code: str | None = None,
    next_path: str | None = Query(None, alias="next"),
    redirect_path: str | None = Query(None, alias="redirect"),
    config: AppConfig = Depends(get_config),
    accounts: AccountService = Depends(get_account_service),
) -> RedirectResponse:
    """Exchange the authorization code for a session and redirect into the site."""
    base_url = config.site.base_url.rstrip("/") + "/"
    cookie_cfg = config.auth.cookie
    error_url = urljoin(base_url, config.auth.error_path.lstrip("/"))

    if not code:
        return RedirectResponse(error_url)

    try:
        session = accounts.exchange_code(code, request.cookies.get(cookie_cfg.verifier_name))
    except RemoteServiceError as e:
        logger.warning("Authorization code exchange failed: %s", e)
        return RedirectResponse(error_url)

    destination = safe_next_path(next_path or redirect_path, config.auth.default_next)
    response = RedirectResponse(urljoin(base_url, destination.lstrip("/")))
    response.set_cookie(
        cookie_cfg.name,
        session.access_token,
        max_age=session.expires_in,
        secure=cookie_cfg.secure,
        httponly=cookie_cfg.http_only,
        samesite=cookie_cfg.same_site,
    )
    if session.refresh_token:
        response.set_cookie(
            cookie_cfg.refresh_name,
            session.refresh_token,
            secure=cookie_cfg.secure,
            httponly=cookie_cfg.http_only,
            samesite=cookie_cfg.same_site,
        )
    response.delete_cookie(cookie_cfg.verifier_name)
    return response
