"""
Cart component - Data models.

LineItem fields beyond the core set (service name, platform, target link)
are carried through untouched; unknown keys found in persisted state are
kept in `extra` so a round-trip never drops data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Number = int | float

_CORE_FIELDS = (
    "service_id",
    "quantity",
    "price_usd",
    "price_cdf",
    "total_usd",
    "total_cdf",
    "service_name",
    "platform_id",
    "target_link",
)


def _number(data: dict[str, Any], key: str) -> Number:
    value = data[key]
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {type(value).__name__}")
    return value


@dataclass
class LineItem:
    """One service entry in the cart, keyed by `service_id`."""

    service_id: str
    quantity: Number
    price_usd: Number
    price_cdf: Number
    total_usd: Number
    total_cdf: Number
    service_name: str | None = None
    platform_id: str | None = None
    target_link: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        service_id: str,
        quantity: Number,
        price_usd: Number,
        price_cdf: Number,
        **kwargs: Any,
    ) -> LineItem:
        """Build an item with totals derived from unit prices."""
        return cls(
            service_id=service_id,
            quantity=quantity,
            price_usd=price_usd,
            price_cdf=price_cdf,
            total_usd=price_usd * quantity,
            total_cdf=price_cdf * quantity,
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "service_id": self.service_id,
                "quantity": self.quantity,
                "price_usd": self.price_usd,
                "price_cdf": self.price_cdf,
                "total_usd": self.total_usd,
                "total_cdf": self.total_cdf,
            }
        )
        for name in ("service_name", "platform_id", "target_link"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineItem:
        """
        Create from a persisted dict.

        Raises KeyError if a required key is missing and ValueError if a
        key holds the wrong type. Missing totals are derived from unit
        prices.
        """
        service_id = data["service_id"]
        if not isinstance(service_id, str):
            raise ValueError(f"service_id must be a string, got {type(service_id).__name__}")

        quantity = _number(data, "quantity")
        price_usd = _number(data, "price_usd")
        price_cdf = _number(data, "price_cdf")
        total_usd = _number(data, "total_usd") if "total_usd" in data else price_usd * quantity
        total_cdf = _number(data, "total_cdf") if "total_cdf" in data else price_cdf * quantity
        return cls(
            service_id=service_id,
            quantity=quantity,
            price_usd=price_usd,
            price_cdf=price_cdf,
            total_usd=total_usd,
            total_cdf=total_cdf,
            service_name=data.get("service_name"),
            platform_id=data.get("platform_id"),
            target_link=data.get("target_link"),
            extra={k: v for k, v in data.items() if k not in _CORE_FIELDS},
        )


@dataclass(frozen=True)
class CartSummary:
    """Read-only view of the cart returned by shell functions."""

    items: tuple[LineItem, ...]
    item_count: int
    total_usd: Number
    total_cdf: Number
