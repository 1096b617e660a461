"""A growable array of strings with insert, remove and merge helpers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class StringArray:
    """An ordered collection of strings."""

    def __init__(self, items: Iterable[str] | None = None) -> None:
        self._items: list[str] = [str(item) for item in items] if items is not None else []

    def __repr__(self) -> str:
        return f"StringArray({self._items!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __getitem__(self, idx: int) -> str:
        return self._items[idx]

    def append(self, item: str) -> StringArray:
        """Add ``item`` at the end and return ``self``."""
        if item is None:
            raise ValueError("cannot append None")
        self._items.append(str(item))
        return self

    def insert(self, idx: int, item: str) -> StringArray:
        """Insert ``item`` before the existing element at ``idx``.

        ``idx`` must name an existing element; appending at the end is
        done with :meth:`append`.
        """
        if item is None:
            raise ValueError("cannot insert None")
        if not 0 <= idx < len(self._items):
            raise IndexError(f"insert position {idx} out of range")
        self._items.insert(idx, str(item))
        return self

    def remove_at(self, idx: int) -> str:
        """Remove and return the element at ``idx``."""
        if not 0 <= idx < len(self._items):
            raise IndexError(f"remove position {idx} out of range")
        return self._items.pop(idx)

    def merge(self, items: Iterable[str]) -> StringArray:
        """Append every element of ``items`` and return ``self``."""
        self._items.extend(str(item) for item in items)
        return self

    def get(self, idx: int) -> str | None:
        """The element at ``idx``, or None when there is none."""
        if 0 <= idx < len(self._items):
            return self._items[idx]
        return None

    def contains(self, item: str) -> bool:
        """True if an element equals ``item``."""
        return item in self._items

    def to_string(self) -> str:
        """Render the array as ``[a, b, c]``."""
        return "[" + ", ".join(self._items) + "]"

    def join(self, delim: str) -> str:
        """Concatenate the elements, each one followed by ``delim``."""
        return "".join(item + delim for item in self._items)