"""
Admin routes for orders.

The collection routes check the admin role themselves and answer with the
public error envelope; the per-order routes use the admin envelope.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_account_service, get_optional_user, get_order_admin_service
from okit_boost.api.responses import error, failure, success, unauthenticated
from okit_boost.components.accounts import AccountService
from okit_boost.components.orders import OrderAdminService
from okit_boost.constants import ACCESS_DENIED
from okit_boost.domain.entities import AuthUser
from okit_boost.domain.errors import InvalidRequest
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


def _admin_denial(user: AuthUser | None, accounts: AccountService) -> JSONResponse | None:
    """An error response unless the caller is an admin. Raises RemoteServiceError."""
    if user is None:
        return unauthenticated()
    if not accounts.is_admin(user.id):
        return error(ACCESS_DENIED, status_code=403)
    return None


@router.get("", response_model=None)
def list_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: AuthUser | None = Depends(get_optional_user),
    accounts: AccountService = Depends(get_account_service),
    service: OrderAdminService = Depends(get_order_admin_service),
) -> dict[str, Any] | JSONResponse:
    """One page of orders, newest first, optionally filtered by status."""
    try:
        denial = _admin_denial(user, accounts)
        if denial is not None:
            return denial
        result = service.list_orders(status, page=page, limit=limit)
    except RemoteServiceError:
        logger.exception("Admin orders fetch failed")
        return error("Erreur lors de la récupération des commandes")
    return {
        "orders": result.orders,
        "total": result.total,
        "page": result.page,
        "totalPages": result.total_pages,
    }


@router.patch("", response_model=None)
def set_order_status(
    body: dict[str, Any] = Body(...),
    user: AuthUser | None = Depends(get_optional_user),
    accounts: AccountService = Depends(get_account_service),
    service: OrderAdminService = Depends(get_order_admin_service),
) -> dict[str, Any] | JSONResponse:
    """Change an order's status: {"orderId", "status", "adminNotes"}."""
    try:
        denial = _admin_denial(user, accounts)
        if denial is not None:
            return denial
        service.set_status(body.get("orderId"), body.get("status"), body.get("adminNotes"))
    except InvalidRequest as e:
        return error(e.message, status_code=400)
    except RemoteServiceError:
        logger.exception("Order status update failed")
        return error("Erreur lors de la mise à jour")
    return success()


@router.patch("/{order_id}", response_model=None)
def update_order(
    order_id: str,
    body: dict[str, Any] = Body(...),
    service: OrderAdminService = Depends(get_order_admin_service),
) -> dict[str, Any] | JSONResponse:
    try:
        return success(order=service.update_order(order_id, body))
    except RemoteServiceError:
        logger.exception("Error updating order %s", order_id)
        return failure("Erreur lors de la mise à jour de la commande")


@router.delete("/{order_id}", response_model=None)
def delete_order(
    order_id: str,
    service: OrderAdminService = Depends(get_order_admin_service),
) -> dict[str, Any] | JSONResponse:
    """Delete an order and its line items."""
    try:
        service.delete_order(order_id)
        return success()
    except RemoteServiceError:
        logger.exception("Error deleting order %s", order_id)
        return failure("Erreur lors de la suppression de la commande")
