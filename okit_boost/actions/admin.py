"""
Admin actions for the back-office dashboard.

Every action checks that the caller is signed in and holds the admin role
before touching data.
"""

import logging

from okit_boost.actions.errors import ActionError, AdminRequired, AuthRequired
from okit_boost.components.orders import AdminStats
from okit_boost.constants import ERROR_MESSAGES, LOGIN_PATH, OrderStatus
from okit_boost.context import ServiceContext
from okit_boost.domain.entities import AuthUser
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)


def require_admin(ctx: ServiceContext, access_token: str | None) -> AuthUser:
    accounts = ctx.account_service
    try:
        user = accounts.resolve_user(access_token)
        is_admin = user is not None and accounts.is_admin(user.id)
    except RemoteServiceError:
        logger.warning("Admin check failed; treating caller as anonymous", exc_info=True)
        user, is_admin = None, False

    if user is None:
        raise AuthRequired(ERROR_MESSAGES["UNAUTHORIZED"], redirect_to=LOGIN_PATH)
    if not is_admin:
        raise AdminRequired(ERROR_MESSAGES["FORBIDDEN"], redirect_to="/")
    return user


def get_admin_stats(ctx: ServiceContext, access_token: str | None) -> AdminStats:
    """Dashboard figures; zeros when the backend fails."""
    require_admin(ctx, access_token)
    try:
        return ctx.order_service.get_stats()
    except RemoteServiceError:
        logger.exception("Error getting admin stats")
        return AdminStats()


def update_order_status(
    ctx: ServiceContext,
    access_token: str | None,
    order_id: str,
    status: OrderStatus,
    admin_notes: str = "",
) -> dict[str, bool]:
    require_admin(ctx, access_token)
    try:
        ctx.order_service.update_status(order_id, status, admin_notes)
    except RemoteServiceError as e:
        logger.exception("Error updating order status for %s", order_id)
        raise ActionError("Erreur lors de la mise à jour du statut") from e
    return {"success": True}


def verify_payment(ctx: ServiceContext, access_token: str | None, order_id: str) -> dict[str, bool]:
    require_admin(ctx, access_token)
    try:
        ctx.order_service.verify_payment(order_id)
    except RemoteServiceError as e:
        logger.exception("Error verifying payment for %s", order_id)
        raise ActionError("Erreur lors de la vérification du paiement") from e
    return {"success": True}
