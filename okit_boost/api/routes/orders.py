"""Customer orders: checkout and order history."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_checkout_service, get_optional_user
from okit_boost.api.responses import error, success, unauthenticated
from okit_boost.components.orders import CheckoutService
from okit_boost.domain.entities import AuthUser
from okit_boost.domain.errors import InvalidRequest
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=None)
def create_order(
    body: dict[str, Any] = Body(...),
    user: AuthUser | None = Depends(get_optional_user),
    service: CheckoutService = Depends(get_checkout_service),
) -> dict[str, Any] | JSONResponse:
    """Place an order; totals are recomputed from catalog prices."""
    if user is None:
        return unauthenticated()
    try:
        order = service.create_order(user, body)
    except InvalidRequest as e:
        return error(e.message, status_code=400)
    except RemoteServiceError:
        logger.exception("Order creation failed for %s", user.id)
        return error("Erreur lors de la création de la commande")
    return success(order_id=order["id"], order_number=order.get("order_number"))


@router.get("", response_model=None)
def list_orders(
    user: AuthUser | None = Depends(get_optional_user),
    service: CheckoutService = Depends(get_checkout_service),
) -> dict[str, Any] | JSONResponse:
    if user is None:
        return unauthenticated()
    try:
        return {"orders": service.list_user_orders(user.id)}
    except RemoteServiceError:
        logger.exception("Orders fetch failed for %s", user.id)
        return error("Erreur lors de la récupération des commandes")
