"""Account actions: current user lookup and profile edits."""

import logging
from collections.abc import Mapping
from typing import Any

from okit_boost.actions.errors import ActionError, AuthRequired
from okit_boost.constants import LOGIN_PATH, NOT_AUTHENTICATED
from okit_boost.context import ServiceContext
from okit_boost.domain.entities import AuthUser, Row
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)


def get_current_user(
    ctx: ServiceContext, access_token: str | None
) -> tuple[AuthUser | None, Row | None]:
    """Return (user, profile); (None, None) when anonymous or on failure."""
    accounts = ctx.account_service
    try:
        user = accounts.resolve_user(access_token)
        if user is None:
            return None, None
        return user, accounts.get_profile(user.id)
    except RemoteServiceError:
        logger.exception("Error getting current user")
        return None, None


def update_profile(
    ctx: ServiceContext, access_token: str | None, form: Mapping[str, Any]
) -> dict[str, bool]:
    accounts = ctx.account_service
    try:
        user = accounts.resolve_user(access_token)
    except RemoteServiceError:
        logger.warning("Auth lookup failed during profile update", exc_info=True)
        user = None
    if user is None:
        raise AuthRequired(NOT_AUTHENTICATED, redirect_to=LOGIN_PATH)

    try:
        accounts.update_profile(user.id, form.get("full_name"), form.get("phone"))
    except RemoteServiceError as e:
        raise ActionError(e.message) from e
    return {"success": True}
