"""An ordered key/value map and a line-oriented JSON field decoder."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from utilkit.text import Text

ROOT = "/"


@dataclass
class Key:
    """A named value held in a :class:`KeyMap`."""

    name: str
    value: str


@dataclass
class JsonField:
    """One scalar field found while decoding JSON.

    ``structure_path`` is ``"/"`` for top-level fields and ``"/<object>"``
    for fields inside a nested object.
    """

    structure_path: str
    key: str
    value: str


class KeyMap:
    """An insertion-ordered list of keys; lookups return the first match."""

    def __init__(self) -> None:
        self._keys: list[Key] = []

    def __repr__(self) -> str:
        return f"KeyMap({[(k.name, k.value) for k in self._keys]!r})"

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Key]:
        return iter(self._keys)

    def add(self, name: str, value: str) -> KeyMap:
        """Add a key and return ``self``."""
        if name is None or value is None:
            raise ValueError("key name and value must not be None")
        self._keys.append(Key(str(name), str(value)))
        return self

    def get_key(self, name: str) -> Key | None:
        """The first key called ``name``, or None."""
        if name is None:
            return None
        return next((k for k in self._keys if k.name == name), None)

    def get(self, name: str) -> str | None:
        """The value of the first key called ``name``, or None."""
        key = self.get_key(name)
        return key.value if key is not None else None

    def contains(self, name: str) -> bool:
        """True if a key called ``name`` exists; an empty name never matches."""
        if not name:
            return False
        return self.get_key(name) is not None


def _unwrap(value: str) -> str:
    if '"' in value:
        return value[1:-1]
    if value.startswith("[") and value.endswith("]"):
        return value[1:-1]
    return value


def decode_json(data: str) -> list[JsonField]:
    """Decode pretty-printed JSON, one field per line, into a list of fields.

    Lines whose value itself holds a ``:`` are skipped, and commas are
    removed from values.
    """
    lines = Text(data).split("\n")
    if not lines:
        raise ValueError("no JSON data to decode")

    fields: list[JsonField] = []
    structure = ROOT
    for raw in lines:
        line = raw.strip()
        if "}" in line:
            structure = ROOT

        parts = Text(line).split(":")
        if len(parts) != 2:
            continue

        key = parts[0][1:-1].strip()
        value = parts[1].replace(",", "").strip()

        if value.endswith("{"):
            structure = ROOT + key
            continue

        fields.append(JsonField(structure, key, _unwrap(value)))
    return fields


def decode_oneline_json(data: str) -> list[JsonField]:
    """Decode JSON written on a single line by breaking it into lines first."""
    text = Text(data)
    text.replace_char_with_str(",", ",\n")
    text.replace_char_with_str("{", "{\n")
    text.replace_char_with_str("}", "\n}")
    return decode_json(str(text))