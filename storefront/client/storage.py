"""Key/Value Storage — the localStorage contract and its in-memory implementation.

Invariants:
    - Values are strings; callers own their encoding (JSON for the cart)
    - get_item returns None for missing keys
    - set_item overwrites; there is no merge with concurrent writers
"""

from typing import Protocol


class KeyValueStorage(Protocol):
    """Structural contract matching window.localStorage."""
    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = str(value)
