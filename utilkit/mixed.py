"""An array holding values of any type."""

from __future__ import annotations

from typing import Any


class MixedArray:
    """A growable array of arbitrary objects with a chainable ``append``."""

    def __init__(self) -> None:
        self._items: list[Any] = []

    def __repr__(self) -> str:
        return f"MixedArray({self._items!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, idx: int) -> Any:
        return self._items[idx]

    def append(self, item: Any) -> MixedArray:
        """Add ``item`` and return ``self``."""
        self._items.append(item)
        return self