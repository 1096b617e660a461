"""Small network helpers."""

from __future__ import annotations

from utilkit.text import Text


def validate_ipv4(ip: str | Text) -> bool:
    """True if ``ip`` is a dotted IPv4 address whose first octet is 1-255."""
    parts = str(ip).split(".")
    if len(parts) != 4:
        return False
    if not all(part.isascii() and part.isdigit() for part in parts):
        return False
    first, *rest = (int(part) for part in parts)
    if not 1 <= first <= 255:
        return False
    return all(0 <= octet <= 255 for octet in rest)