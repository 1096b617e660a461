"""A mutable string with in-place editing helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from itertools import islice

_BLANK = frozenset(" \t")


def _check_char(ch: str) -> str:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    return ch


class Text:
    """A string that is edited in place.

    Methods that change the text report whether (or how much) it changed.
    """

    def __init__(self, data: str | None = None) -> None:
        self.data: str = data or ""

    def __str__(self) -> str:
        return self.data

    def __repr__(self) -> str:
        return f"Text({self.data!r})"

    def __len__(self) -> int:
        return len(self.data)

    def reset(self, data: str) -> bool:
        """Replace the whole content; an empty value leaves it untouched."""
        if not data:
            return False
        self.data = data
        return True

    def append(self, data: str) -> Text:
        """Append ``data`` and return ``self`` so calls can be chained."""
        self.data += data or ""
        return self

    # -- characters -------------------------------------------------------

    def count_char(self, ch: str) -> int:
        """Number of occurrences of the character ``ch``."""
        return self.data.count(_check_char(ch))

    def find_char(self, ch: str) -> int:
        """Position of the first ``ch``, or -1."""
        return self.find_char_at(ch, 1)

    def find_char_at(self, ch: str, count: int) -> int:
        """Position of the ``count``-th occurrence of ``ch`` (0 or 1 mean the first), or -1."""
        _check_char(ch)
        if count < 0:
            raise ValueError("count must not be negative")
        positions = (i for i, c in enumerate(self.data) if c == ch)
        return next(islice(positions, max(count, 1) - 1, None), -1)

    def strip(self) -> bool:
        """Remove leading and trailing whitespace."""
        stripped = self.data.strip()
        changed = stripped != self.data
        self.data = stripped
        return changed

    def strip_from(self, ch: str) -> bool:
        """Cut the text at the first ``ch``, dropping it and everything after."""
        pos = self.data.find(_check_char(ch))
        if pos < 0:
            return False
        self.data = self.data[:pos]
        return True

    def is_empty(self) -> bool:
        """True when the text holds nothing but spaces and tabs."""
        return all(c in _BLANK for c in self.data)

    def trim(self, ch: str) -> bool:
        """Remove every occurrence of ``ch``."""
        trimmed = self.data.replace(_check_char(ch), "")
        changed = len(trimmed) < len(self.data)
        self.data = trimmed
        return changed

    def trim_at(self, idx: int) -> bool:
        """Remove the character at ``idx``."""
        if not 0 <= idx < len(self.data):
            return False
        self.data = self.data[:idx] + self.data[idx + 1:]
        return True

    # -- substrings -------------------------------------------------------

    def find_substr(self, substr: str) -> int:
        """Position of the first ``substr``, or -1."""
        return self.data.find(substr) if substr else -1

    def count_substr(self, substr: str) -> int:
        """Count (possibly overlapping) occurrences; substrings shorter than 2 count as 0."""
        if not self.data or len(substr) < 2:
            return 0
        return len(re.findall(f"(?={re.escape(substr)})", self.data))

    def get_substr(self, start: int, end: int) -> str:
        """Characters from ``start`` up to but not including ``end``."""
        return self.data[max(start, 0):max(end, 0)]

    def remove_substr(self, start: int, end: int) -> bool:
        """Remove characters from ``start`` through ``end`` inclusive."""
        start = max(start, 0)
        if end < start:
            return False
        self.data = self.data[:start] + self.data[end + 1:]
        return True

    def starts_with(self, prefix: str) -> bool:
        """True if the text starts with ``prefix``; prefixes shorter than 2 never match."""
        if not self.data or len(prefix) < 2:
            return False
        return self.data.startswith(prefix)

    def ends_with(self, suffix: str) -> bool:
        """True if the text ends with a non-empty ``suffix``."""
        if not self.data or not suffix:
            return False
        return self.data.endswith(suffix)

    # -- case -------------------------------------------------------------

    def is_upper(self) -> bool:
        """True when every character is an upper-case letter."""
        return bool(self.data) and all(c.isalpha() and c.isupper() for c in self.data)

    def is_lower(self) -> bool:
        """True when every character is a lower-case letter."""
        return bool(self.data) and all(c.isalpha() and c.islower() for c in self.data)

    def to_upper(self) -> int:
        """Upper-case the text; return how many letters changed."""
        changed = sum(1 for c in self.data if c.isalpha() and c.islower())
        self.data = "".join(c.upper() if c.isalpha() else c for c in self.data)
        return changed

    def to_lower(self) -> int:
        """Lower-case the text; return how many letters changed."""
        changed = sum(1 for c in self.data if c.isalpha() and c.isupper())
        self.data = "".join(c.lower() if c.isalpha() else c for c in self.data)
        return changed

    # -- replacing --------------------------------------------------------

    def replace_char(self, ch: str, replacement: str) -> int:
        """Replace every ``ch`` with the character ``replacement``; return the count."""
        count = self.count_char(ch)
        self.data = self.data.replace(ch, _check_char(replacement))
        return count

    def replace_char_with_str(self, ch: str, replacement: str) -> int:
        """Replace every ``ch`` with the string ``replacement``; return the count."""
        count = self.count_char(ch)
        self.data = self.data.replace(ch, replacement)
        return count

    def replace(self, find: str, replacement: str) -> str:
        """Replace the first occurrence of ``find`` and return the new text."""
        if find:
            self.data = self.data.replace(find, replacement, 1)
        return self.data

    # -- splitting and joining --------------------------------------------

    def split(self, delims: str) -> list[str]:
        """Split on any of the characters in ``delims``, dropping empty pieces."""
        if not delims:
            return [self.data] if self.data else []
        pattern = "[" + re.escape(delims) + "]+"
        return [piece for piece in re.split(pattern, self.data) if piece]

    def split_on_char(self, delim: str) -> list[str]:
        """Split on every ``delim``, keeping empty pieces."""
        return self.data.split(_check_char(delim))

    def join(self, items: Iterable[str], delim: str) -> Text:
        """Append ``items`` separated by ``delim``; return ``self``."""
        self.data += _check_char(delim).join(items)
        return self