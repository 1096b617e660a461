"""A fixed number of rows, each a growable list of strings."""

from __future__ import annotations

from collections.abc import Iterator


class Row:
    """One row of a :class:`Grid`."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def __repr__(self) -> str:
        return f"Row({self._items!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def append(self, item: str) -> Row:
        """Add ``item`` to the row and return the row for chaining."""
        if item is None:
            raise ValueError("cannot append None")
        self._items.append(str(item))
        return self


class Grid:
    """A two-dimensional array of strings with a fixed number of rows."""

    def __init__(self, rows: int) -> None:
        if rows < 0:
            raise ValueError("rows must not be negative")
        self._rows: list[Row] = [Row() for _ in range(rows)]

    def __repr__(self) -> str:
        return f"Grid({[list(r) for r in self._rows]!r})"

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def append(self, row: int, item: str) -> Row:
        """Append ``item`` to ``row`` and return that row."""
        if not 0 <= row < len(self._rows):
            raise IndexError(f"row {row} out of range")
        return self._rows[row].append(item)

    def get(self, row: int, column: int) -> str | None:
        """The element at ``row``, ``column``, or None if there is none."""
        if not 0 <= row < len(self._rows):
            return None
        items = list(self._rows[row])
        if not 0 <= column < len(items):
            return None
        return items[column]