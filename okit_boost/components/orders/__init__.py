"""
Orders component - Checkout and back-office order administration.
"""

from ._impl import (
    ORDER_ITEMS,
    ORDERS,
    SETTABLE_ORDER_STATUSES,
    AdminStats,
    CheckoutService,
    OrderAdminService,
    OrderPage,
    PricedLine,
)

__all__ = [
    "CheckoutService",
    "OrderAdminService",
    "AdminStats",
    "OrderPage",
    "PricedLine",
    "ORDERS",
    "ORDER_ITEMS",
    "SETTABLE_ORDER_STATUSES",
]
