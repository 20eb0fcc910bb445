import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from okit_boost.components.accounts import AccountService
from okit_boost.components.catalog import CatalogService
from okit_boost.components.orders import CheckoutService, OrderAdminService
from okit_boost.components.trials import TrialService
from okit_boost.config.loader import load_config
from okit_boost.config.models import AppConfig
from okit_boost.context import ServiceContext
from okit_boost.domain.entities import AuthUser
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)


# --- Config ---
@lru_cache
def get_config() -> AppConfig:
    return load_config()


# --- Context (remote backend + component services) ---
_context_instance: ServiceContext | None = None


def get_context(config: AppConfig = Depends(get_config)) -> ServiceContext:
    """Get service context singleton."""
    global _context_instance
    if _context_instance is None:
        _context_instance = ServiceContext.create(config)
    return _context_instance


def reset_context() -> None:
    """Drop the context singleton, closing its HTTP client."""
    global _context_instance
    if _context_instance is not None:
        _context_instance.close()
    _context_instance = None


# --- Component Services ---
def get_catalog_service(ctx: ServiceContext = Depends(get_context)) -> CatalogService:
    return ctx.catalog_service


def get_trial_service(ctx: ServiceContext = Depends(get_context)) -> TrialService:
    return ctx.trial_service


def get_account_service(ctx: ServiceContext = Depends(get_context)) -> AccountService:
    return ctx.account_service


def get_checkout_service(ctx: ServiceContext = Depends(get_context)) -> CheckoutService:
    return ctx.checkout_service


def get_order_admin_service(ctx: ServiceContext = Depends(get_context)) -> OrderAdminService:
    return ctx.order_service


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/callback", auto_error=False)


def get_access_token(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    config: AppConfig = Depends(get_config),
) -> str | None:
    # Cookie first (set by the auth callback), then Authorization header
    cookie_token = request.cookies.get(config.auth.cookie.name)
    if cookie_token:
        if cookie_token.startswith("Bearer "):
            return cookie_token.split(" ", 1)[1]
        return cookie_token
    return token


def get_optional_user(
    token: Annotated[str | None, Depends(get_access_token)],
    accounts: AccountService = Depends(get_account_service),
) -> AuthUser | None:
    """The authenticated caller, or None. Auth service failures count as unauthenticated."""
    try:
        return accounts.resolve_user(token)
    except RemoteServiceError as e:
        logger.warning("Auth lookup failed, treating caller as anonymous: %s", e)
        return None
