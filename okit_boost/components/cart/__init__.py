"""
Cart component - Persisted client-side shopping cart.
"""

from ._impl import CartStore, dump_snapshot, load_snapshot
from .component import (
    AddItemInput,
    RemoveItemInput,
    UpdateQuantityInput,
    run_add,
    run_clear,
    run_remove,
    run_update_quantity,
    summarize,
)
from .models import CartSummary, LineItem
from .ports import CartStorageError, KeyValueStoragePort

__all__ = [
    # Store
    "CartStore",
    "dump_snapshot",
    "load_snapshot",
    # Entry points
    "run_add",
    "run_update_quantity",
    "run_remove",
    "run_clear",
    "summarize",
    # Input models
    "AddItemInput",
    "UpdateQuantityInput",
    "RemoveItemInput",
    # Output models
    "CartSummary",
    "LineItem",
    # Ports
    "KeyValueStoragePort",
    "CartStorageError",
]
