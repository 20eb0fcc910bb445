"""
CatalogService - Platforms and services of the storefront.

Thin layer over the remote `platforms` and `services` tables. Remote
failures propagate as RemoteServiceError; the HTTP shell turns them into
error envelopes.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from okit_boost.constants import PLATFORM_DEFAULT_COLORS, SERVICE_DEFAULTS
from okit_boost.domain.entities import Row
from okit_boost.domain.errors import DuplicateRequest, InvalidRequest
from okit_boost.ports.remote import TablePort, single_row

PLATFORMS = "platforms"
SERVICES = "services"

# Columns exposed by the public service listing
PUBLIC_SERVICE_COLUMNS = (
    "id,platform_id,name,description,category,price_usd,price_cdf,"
    "min_quantity,max_quantity,delivery_time,quality,is_active"
)


def slugify_platform_id(value: str) -> str:
    """Lowercase and replace whitespace runs with '-'."""
    return re.sub(r"\s+", "-", value.lower())


def _to_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class CatalogService:
    def __init__(self, tables: TablePort) -> None:
        self._tables = tables

    # --- Public reads ---

    def list_active_platforms(self) -> list[Row]:
        return self._tables.select(PLATFORMS, filters={"is_active": True}, order_by="name")

    def get_active_platform(self, platform_id: str) -> Row | None:
        rows = self._tables.select(
            PLATFORMS, filters={"id": platform_id, "is_active": True}, limit=1
        )
        return rows[0] if rows else None

    def list_active_services(self, platform_id: str, columns: str = "*") -> list[Row]:
        return self._tables.select(
            SERVICES,
            filters={"platform_id": platform_id, "is_active": True},
            order_by="name",
            columns=columns,
        )

    def list_platforms_with_stats(self) -> list[Row]:
        """
        Active platforms that offer active services, with count and cheapest CDF price.
        """
        result: list[Row] = []
        for platform in self.list_active_platforms():
            filters = {"platform_id": platform["id"], "is_active": True}
            services_count = self._tables.count(SERVICES, filters=filters)
            if services_count == 0:
                continue
            cheapest = self._tables.select(
                SERVICES, filters=filters, order_by="price_cdf", limit=1, columns="price_cdf"
            )
            result.append(
                {
                    **platform,
                    "services_count": services_count,
                    "min_price": cheapest[0].get("price_cdf") if cheapest else None,
                }
            )
        return result

    # --- Admin: services ---

    def list_services_with_platform(self) -> list[Row]:
        """All services, newest first, each with its platform's id and name."""
        services = self._tables.select(SERVICES, order_by="created_at", descending=True)
        platforms = {
            p["id"]: {"id": p["id"], "name": p.get("name")}
            for p in self._tables.select(PLATFORMS, columns="id,name")
        }
        return [{**s, "platforms": platforms.get(s.get("platform_id"))} for s in services]

    def create_service(self, data: Mapping[str, Any]) -> Row:
        if not data.get("platform_id") or not data.get("name") or not data.get("category"):
            raise InvalidRequest("Plateforme, nom et catégorie sont requis")

        row = {
            "platform_id": data["platform_id"],
            "name": data["name"],
            "description": data.get("description"),
            "category": data["category"],
            "price_usd": _to_float(data.get("price_usd"), 0.0),
            "price_cdf": _to_float(data.get("price_cdf"), 0.0),
            "min_quantity": _to_int(data.get("min_quantity"), SERVICE_DEFAULTS["min_quantity"])
            or SERVICE_DEFAULTS["min_quantity"],
            "max_quantity": _to_int(data.get("max_quantity"), SERVICE_DEFAULTS["max_quantity"])
            or SERVICE_DEFAULTS["max_quantity"],
            "delivery_time": data.get("delivery_time") or SERVICE_DEFAULTS["delivery_time"],
            "quality": data.get("quality") or SERVICE_DEFAULTS["quality"],
            "is_active": data.get("is_active") is not False,
        }
        return self._tables.insert(SERVICES, row)

    def update_service(self, service_id: str, values: Mapping[str, Any]) -> Row:
        filters = {"id": service_id}
        return single_row(self._tables.update(SERVICES, values, filters=filters), SERVICES, filters)

    def delete_service(self, service_id: str) -> None:
        self._tables.delete(SERVICES, filters={"id": service_id})

    # --- Admin: platforms ---

    def list_platforms_with_counts(self) -> list[Row]:
        """All platforms, newest first, with their number of services."""
        return [
            {**p, "services_count": self._tables.count(SERVICES, filters={"platform_id": p["id"]})}
            for p in self._tables.select(PLATFORMS, order_by="created_at", descending=True)
        ]

    def create_platform(self, data: Mapping[str, Any]) -> Row:
        platform_id = data.get("id")
        if not platform_id or not data.get("name"):
            raise InvalidRequest("ID et nom sont requis")

        # Duplicate check runs on the id as given, before slugification
        if self._tables.select(PLATFORMS, filters={"id": platform_id}, columns="id", limit=1):
            raise DuplicateRequest("Une plateforme avec cet ID existe déjà")

        color_from, color_to = PLATFORM_DEFAULT_COLORS
        row = {
            "id": slugify_platform_id(str(platform_id)),
            "name": data["name"],
            "description": data.get("description"),
            "icon_url": data.get("icon_url"),
            "color_from": data.get("color_from") or color_from,
            "color_to": data.get("color_to") or color_to,
            "is_active": data.get("is_active") is not False,
        }
        return self._tables.insert(PLATFORMS, row)

    def update_platform(self, platform_id: str, values: Mapping[str, Any]) -> Row:
        filters = {"id": platform_id}
        return single_row(
            self._tables.update(PLATFORMS, values, filters=filters), PLATFORMS, filters
        )

    def delete_platform(self, platform_id: str) -> None:
        """Delete the platform's services, then the platform."""
        self._tables.delete(SERVICES, filters={"platform_id": platform_id})
        self._tables.delete(PLATFORMS, filters={"id": platform_id})
