"""
Cart component - Port interfaces.

The cart persists to a durable local key-value slot. Implementations:
in-memory (tests) and JSON files on disk (CLI client).
"""

from __future__ import annotations

from typing import Protocol


class CartStorageError(Exception):
    """Local storage could not be read or written."""


class KeyValueStoragePort(Protocol):
    """String key-value storage, shaped like browser localStorage."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Overwrite the value under key."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove the key; no-op if absent."""
        ...
