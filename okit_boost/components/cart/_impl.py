"""
CartStore - Persisted shopping cart state container.

Holds the ordered line items of one client session and writes a full
snapshot to local key-value storage after every mutation.

Key behaviors:
- Items are unique by service_id and keep insertion order
- update_quantity re-derives totals from unit prices
- add_item on an existing id overwrites quantity and totals only
- Missing or corrupt persisted state loads as an empty cart
- Storage write failures are logged; the in-memory mutation stands
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable
from typing import Any

from okit_boost.constants import CART_STORAGE_KEY

from .models import LineItem, Number
from .ports import CartStorageError, KeyValueStoragePort

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 0

Listener = Callable[["CartStore"], None]


# --- Snapshot Serialization ---


def dump_snapshot(items: list[LineItem]) -> str:
    """Serialize the full cart state for the storage slot."""
    return json.dumps(
        {
            "state": {"items": [item.to_dict() for item in items]},
            "version": SNAPSHOT_VERSION,
        },
        ensure_ascii=False,
    )


def _extract_items(payload: Any) -> list[Any]:
    if not isinstance(payload, dict):
        raise ValueError("snapshot is not an object")
    state = payload.get("state", payload)
    if not isinstance(state, dict):
        raise ValueError("snapshot state is not an object")
    items = state.get("items")
    if not isinstance(items, list):
        raise ValueError("snapshot items is not a list")
    return items


def load_snapshot(raw: str | None) -> list[LineItem]:
    """
    Parse a stored snapshot.

    Accepts `{"state": {"items": [...]}}` and bare `{"items": [...]}`.
    Returns an empty list for absent or malformed data.
    """
    if raw is None:
        return []

    try:
        entries = _extract_items(json.loads(raw))
        items: list[LineItem] = []
        seen: set[str] = set()
        for entry in entries:
            item = LineItem.from_dict(entry)
            if item.service_id in seen:
                continue
            seen.add(item.service_id)
            items.append(item)
    except (ValueError, KeyError, TypeError, AttributeError, RecursionError) as e:
        logger.warning("Discarding unreadable cart state: %s", e)
        return []
    return items


# --- Cart Store ---


class CartStore:
    """
    Cart state container.

    Owned by the application's root composition and passed by reference
    to whatever needs the cart. Listeners registered with subscribe() run
    after each mutation has been persisted.
    """

    def __init__(
        self,
        storage: KeyValueStoragePort,
        *,
        key: str = CART_STORAGE_KEY,
        hydrate: bool = True,
    ) -> None:
        self._storage = storage
        self._key = key
        self._items: list[LineItem] = []
        self._listeners: list[Listener] = []
        if hydrate:
            self.rehydrate()

    # --- Queries ---

    @property
    def items(self) -> list[LineItem]:
        """Copies of the current items, in insertion order."""
        return [dataclasses.replace(item, extra=dict(item.extra)) for item in self._items]

    @property
    def item_count(self) -> int:
        return len(self._items)

    def get_item(self, service_id: str) -> LineItem | None:
        found = self._find(service_id)
        return dataclasses.replace(found, extra=dict(found.extra)) if found else None

    def get_total_usd(self) -> Number:
        return sum((item.total_usd for item in self._items), 0)

    def get_total_cdf(self) -> Number:
        return sum((item.total_cdf for item in self._items), 0)

    # --- Mutations ---

    def add_item(self, item: LineItem) -> None:
        existing = self._find(item.service_id)
        if existing is None:
            self._items.append(dataclasses.replace(item, extra=dict(item.extra)))
            logger.info("Added %s to cart (qty=%s)", item.service_id, item.quantity)
        else:
            if (existing.price_usd, existing.price_cdf) != (item.price_usd, item.price_cdf):
                logger.debug(
                    "Re-added %s with different unit prices; keeping stored prices",
                    item.service_id,
                )
            existing.quantity = item.quantity
            existing.total_usd = item.total_usd
            existing.total_cdf = item.total_cdf
            logger.info("Updated %s in cart (qty=%s)", item.service_id, item.quantity)
        self._commit()

    def remove_item(self, service_id: str) -> None:
        self._items = [item for item in self._items if item.service_id != service_id]
        self._commit()

    def update_quantity(self, service_id: str, quantity: Number) -> None:
        item = self._find(service_id)
        if item is not None:
            item.quantity = quantity
            item.total_usd = item.price_usd * quantity
            item.total_cdf = item.price_cdf * quantity
        self._commit()

    def clear_cart(self) -> None:
        self._items = []
        logger.info("Cleared cart")
        self._commit()

    def migrate_items(self) -> None:
        """Move legacy `platform` values to `platform_id` on every item."""
        for item in self._items:
            legacy = item.extra.pop("platform", None)
            item.platform_id = item.platform_id or legacy
        self._commit()

    def initialize(self) -> None:
        """Run the legacy migration when any stored item still needs it."""
        if any(item.extra.get("platform") and not item.platform_id for item in self._items):
            self.migrate_items()

    def rehydrate(self) -> None:
        """Reload items from storage, falling back to an empty cart."""
        try:
            raw = self._storage.get_item(self._key)
        except CartStorageError as e:
            logger.warning("Cart storage unreadable, starting empty: %s", e)
            raw = None
        self._items = load_snapshot(raw)
        self.initialize()

    # --- Subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Internals ---

    def _find(self, service_id: str) -> LineItem | None:
        return next((item for item in self._items if item.service_id == service_id), None)

    def _commit(self) -> None:
        try:
            self._storage.set_item(self._key, dump_snapshot(self._items))
        except CartStorageError:
            logger.exception("Failed to persist cart under %s", self._key)
        for listener in list(self._listeners):
            listener(self)
