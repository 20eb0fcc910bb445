"""
Cart component - Shell layer.

Entry points used by front-ends (CLI, UI) to drive a CartStore and read
back a summary.
"""

from __future__ import annotations

from dataclasses import dataclass

from ._impl import CartStore
from .models import CartSummary, LineItem, Number

# --- Component Inputs ---


@dataclass(frozen=True)
class AddItemInput:
    """Input for adding a service to the cart."""

    service_id: str
    quantity: Number
    price_usd: Number
    price_cdf: Number
    service_name: str | None = None
    platform_id: str | None = None
    target_link: str | None = None


@dataclass(frozen=True)
class UpdateQuantityInput:
    """Input for changing an item's quantity."""

    service_id: str
    quantity: Number


@dataclass(frozen=True)
class RemoveItemInput:
    """Input for removing an item."""

    service_id: str


# --- Shell Layer Functions ---


def summarize(store: CartStore) -> CartSummary:
    items = tuple(store.items)
    return CartSummary(
        items=items,
        item_count=len(items),
        total_usd=store.get_total_usd(),
        total_cdf=store.get_total_cdf(),
    )


def run_add(input_data: AddItemInput, store: CartStore) -> CartSummary:
    """Add a service, deriving line totals from the unit prices."""
    store.add_item(
        LineItem.create(
            service_id=input_data.service_id,
            quantity=input_data.quantity,
            price_usd=input_data.price_usd,
            price_cdf=input_data.price_cdf,
            service_name=input_data.service_name,
            platform_id=input_data.platform_id,
            target_link=input_data.target_link,
        )
    )
    return summarize(store)


def run_update_quantity(input_data: UpdateQuantityInput, store: CartStore) -> CartSummary:
    store.update_quantity(input_data.service_id, input_data.quantity)
    return summarize(store)


def run_remove(input_data: RemoveItemInput, store: CartStore) -> CartSummary:
    store.remove_item(input_data.service_id)
    return summarize(store)


def run_clear(store: CartStore) -> CartSummary:
    store.clear_cart()
    return summarize(store)
