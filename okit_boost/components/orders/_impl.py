"""
Orders component.

CheckoutService places and lists a customer's own orders. Unit prices are
always re-read from the `services` table, so totals sent by the client are
ignored. OrderAdminService is the back-office view: dashboard figures,
paginated listing and status changes.

Order rows carry their line items under `order_items`; each item carries
the `services` fields (name, platform_id) it was ordered from.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from okit_boost.components.catalog import SERVICES
from okit_boost.constants import ORDER_STATUS, PAYMENT_STATUS, USER_ROLES, OrderStatus
from okit_boost.domain.entities import AuthUser, Row
from okit_boost.domain.errors import InvalidRequest
from okit_boost.ports.remote import TablePort, single_row

ORDERS = "orders"
ORDER_ITEMS = "order_items"
RECENT_ORDERS_LIMIT = 10
DEFAULT_PAGE_SIZE = 20

# Statuses an admin may set from the order list; `failed` is set by payment only
SETTABLE_ORDER_STATUSES = ("pending", "processing", "completed", "cancelled", "refunded")

ORDER_FIELDS = (
    "currency",
    "customer_name",
    "customer_email",
    "customer_phone",
    "payment_method",
    "notes",
)


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _attach_items(tables: TablePort, orders: Iterable[Row]) -> list[Row]:
    service_cache: dict[str, Row | None] = {}

    def service_summary(service_id: Any) -> Row | None:
        if service_id not in service_cache:
            rows = tables.select(
                SERVICES, filters={"id": service_id}, columns="name,platform_id", limit=1
            )
            service_cache[service_id] = rows[0] if rows else None
        return service_cache[service_id]

    result = []
    for order in orders:
        items = tables.select(ORDER_ITEMS, filters={"order_id": order["id"]})
        for item in items:
            item["services"] = service_summary(item.get("service_id"))
        result.append({**order, "order_items": items})
    return result


@dataclass
class PricedLine:
    """One requested line, priced from the catalog."""

    service_id: str
    quantity: int | float
    price_usd: int | float
    price_cdf: int | float
    service_name: str | None = None
    platform_name: str | None = None
    target_link: str | None = None

    @property
    def total_usd(self) -> int | float:
        return self.price_usd * self.quantity

    @property
    def total_cdf(self) -> int | float:
        return self.price_cdf * self.quantity

    def to_row(self, order_id: str) -> Row:
        return {
            "order_id": order_id,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "platform_name": self.platform_name,
            "target_link": self.target_link,
            "quantity": self.quantity,
            "unit_price_usd": self.price_usd,
            "unit_price_cdf": self.price_cdf,
            "total_usd": self.total_usd,
            "total_cdf": self.total_cdf,
        }


class CheckoutService:
    def __init__(self, tables: TablePort) -> None:
        self._tables = tables

    def price_items(self, items: Any) -> list[PricedLine]:
        """
        Validate requested items and price them from the catalog.

        Raises:
            InvalidRequest: No items, a malformed item or quantity, or a
                service id that is unknown or repeated
        """
        if not isinstance(items, list) or not items:
            raise InvalidRequest("Aucun article dans la commande", field="items")

        lines: list[PricedLine] = []
        seen: set[str] = set()
        for item in items:
            if not isinstance(item, Mapping) or not isinstance(item.get("service_id"), str):
                raise InvalidRequest("Un ou plusieurs services sont invalides", field="items")
            quantity = item.get("quantity")
            if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
                raise InvalidRequest("Quantité invalide", field="quantity")
            if quantity <= 0:
                raise InvalidRequest("Quantité invalide", field="quantity")

            service_id = item["service_id"]
            rows = self._tables.select(SERVICES, filters={"id": service_id}, limit=1)
            if not rows or service_id in seen:
                raise InvalidRequest("Un ou plusieurs services sont invalides", field="items")
            seen.add(service_id)

            service = rows[0]
            lines.append(
                PricedLine(
                    service_id=service_id,
                    quantity=quantity,
                    price_usd=service.get("price_usd") or 0,
                    price_cdf=service.get("price_cdf") or 0,
                    service_name=item.get("service_name") or service.get("name"),
                    platform_name=item.get("platform") or item.get("platform_id"),
                    target_link=item.get("target_link"),
                )
            )
        return lines

    def create_order(self, user: AuthUser, data: Mapping[str, Any]) -> Row:
        """Place an order for `user` and return the stored order row."""
        lines = self.price_items(data.get("items"))
        order = self._tables.insert(
            ORDERS,
            {
                "user_id": user.id,
                "total_usd": sum((line.total_usd for line in lines), 0),
                "total_cdf": sum((line.total_cdf for line in lines), 0),
                **{name: data.get(name) for name in ORDER_FIELDS},
            },
        )
        for line in lines:
            self._tables.insert(ORDER_ITEMS, line.to_row(order["id"]))
        return order

    def list_user_orders(self, user_id: str) -> list[Row]:
        orders = self._tables.select(
            ORDERS, filters={"user_id": user_id}, order_by="created_at", descending=True
        )
        return _attach_items(self._tables, orders)


# --- Back office ---


@dataclass
class AdminStats:
    total_orders: int = 0
    pending_orders: int = 0
    total_users: int = 0
    total_revenue_cdf: float = 0
    total_revenue_usd: float = 0
    recent_orders: list[Row] = field(default_factory=list)


@dataclass
class OrderPage:
    orders: list[Row]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class OrderAdminService:
    def __init__(self, tables: TablePort) -> None:
        self._tables = tables

    def get_stats(self) -> AdminStats:
        completed = self._tables.select(
            ORDERS, filters={"status": ORDER_STATUS["COMPLETED"]}, columns="total_cdf,total_usd"
        )
        return AdminStats(
            total_orders=self._tables.count(ORDERS),
            pending_orders=self._tables.count(ORDERS, filters={"status": ORDER_STATUS["PENDING"]}),
            total_users=self._tables.count("profiles", filters={"role": USER_ROLES["USER"]}),
            total_revenue_cdf=sum(o.get("total_cdf") or 0 for o in completed),
            total_revenue_usd=sum(o.get("total_usd") or 0 for o in completed),
            recent_orders=self._tables.select(
                ORDERS, order_by="created_at", descending=True, limit=RECENT_ORDERS_LIMIT
            ),
        )

    def list_orders(
        self, status: str | None = None, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> OrderPage:
        """One page of orders, newest first, with the customer's profile and line items."""
        filters = {"status": status} if status else None
        total = self._tables.count(ORDERS, filters=filters)
        rows = self._tables.select(
            ORDERS,
            filters=filters,
            order_by="created_at",
            descending=True,
            limit=limit,
            offset=(page - 1) * limit,
        )
        orders = _attach_items(self._tables, rows)
        for order in orders:
            profiles = self._tables.select(
                "profiles", filters={"id": order.get("user_id")}, columns="full_name,email", limit=1
            )
            order["profiles"] = profiles[0] if profiles else None
        return OrderPage(orders=orders, total=total, page=page, limit=limit)

    def set_status(self, order_id: str, status: str, admin_notes: str | None = None) -> None:
        """
        Status change from the order list.

        Raises:
            InvalidRequest: Missing id or status, or a status outside
                SETTABLE_ORDER_STATUSES
        """
        if not order_id or not status:
            raise InvalidRequest("ID de commande et statut requis")
        if status not in SETTABLE_ORDER_STATUSES:
            raise InvalidRequest("Statut invalide", field="status")
        self._tables.update(
            ORDERS,
            {"status": status, "admin_notes": admin_notes or None, "updated_at": _now()},
            filters={"id": order_id},
        )

    def update_status(self, order_id: str, status: OrderStatus, admin_notes: str = "") -> None:
        self._tables.update(
            ORDERS,
            {"status": status, "admin_notes": admin_notes, "updated_at": _now()},
            filters={"id": order_id},
        )

    def update_order(self, order_id: str, values: Mapping[str, Any]) -> Row:
        filters = {"id": order_id}
        return single_row(self._tables.update(ORDERS, values, filters=filters), ORDERS, filters)

    def delete_order(self, order_id: str) -> None:
        """Delete an order after its line items."""
        self._tables.delete(ORDER_ITEMS, filters={"order_id": order_id})
        self._tables.delete(ORDERS, filters={"id": order_id})

    def verify_payment(self, order_id: str) -> None:
        """Mark the payment verified and move the order to processing."""
        self._tables.update(
            ORDERS,
            {
                "payment_status": PAYMENT_STATUS["VERIFIED"],
                "status": ORDER_STATUS["PROCESSING"],
                "updated_at": _now(),
            },
            filters={"id": order_id},
        )
