"""
Cart Storage Adapters.

Implements KeyValueStoragePort for the cart's durable local slot.

- InMemoryKeyValueStorage: dict-backed, for tests and ephemeral sessions
- JsonFileKeyValueStorage: one file per key under a directory; writes go
  through a temp file and os.replace so a crash never leaves half a value
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from okit_boost.components.cart.ports import CartStorageError
from okit_boost.config.models import CartConfig


class InMemoryKeyValueStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileKeyValueStorage:
    """
    File-backed key-value storage.

    Directory structure: {base_path}/{key}.json
    """

    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        self.base_path = Path(base_path).expanduser()
        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _key_to_path(self, key: str) -> Path:
        # Keys map to flat file names only
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", key).lstrip(".")
        if not safe_key:
            raise CartStorageError(f"Invalid storage key: {key!r}")
        return self.base_path / f"{safe_key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._key_to_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CartStorageError(f"Cannot read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._key_to_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CartStorageError(f"Cannot write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._key_to_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise CartStorageError(f"Cannot remove {path}: {e}") from e


def create_cart_storage(
    config: CartConfig | None = None,
    *,
    base_path: str | Path | None = None,
) -> JsonFileKeyValueStorage:
    """
    Factory function to create file-backed cart storage from config.

    Args:
        config: Cart config section (storage_dir)
        base_path: Explicit directory (overrides config)
    """
    if base_path is None:
        base_path = (config or CartConfig()).storage_dir
    return JsonFileKeyValueStorage(base_path)
