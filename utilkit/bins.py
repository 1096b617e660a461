"""Groups of objects ("bins") that are released together."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Any

_ID_ATTEMPTS = 5


class GarbageKind(IntEnum):
    """What kind of object was placed in a bin."""

    STRING = 0x0400001
    ARRAY = 0x0400002
    STRUCT = 0x0400003


class GarbageCollector:
    """Tracks objects in numbered bins and releases a bin's objects at once."""

    def __init__(self, debug: bool = False) -> None:
        self.debug = bool(debug)
        self._bins: dict[int, list[tuple[GarbageKind, Any]]] = {}

    def __repr__(self) -> str:
        return f"GarbageCollector(bins={sorted(self._bins)!r})"

    def _log(self, message: str) -> None:
        if self.debug:
            print(message)

    def _bin(self, bin_id: int) -> list[tuple[GarbageKind, Any]]:
        try:
            return self._bins[bin_id]
        except KeyError:
            raise KeyError(f"no bin with id {bin_id}") from None

    def create_bin(self) -> int:
        """Open a new bin and return its unique id."""
        for _ in range(_ID_ATTEMPTS):
            bin_id = random.randint(1, 1_000_000)
            if bin_id not in self._bins:
                self._bins[bin_id] = []
                return bin_id
        raise RuntimeError("could not find a free id for a new bin")

    def add(self, bin_id: int, kind: GarbageKind, obj: Any) -> None:
        """Place ``obj`` in the bin ``bin_id``."""
        if obj is None:
            raise ValueError("cannot add None to a bin")
        self._bin(bin_id).append((GarbageKind(kind), obj))

    def add_many(self, bin_id: int, kind: GarbageKind, objs: Any) -> None:
        """Place every object of ``objs`` in the bin ``bin_id``."""
        if objs is None:
            raise ValueError("cannot add None to a bin")
        target = self._bin(bin_id)
        kind = GarbageKind(kind)
        for obj in objs:
            if obj is None:
                raise ValueError("cannot add None to a bin")
            target.append((kind, obj))

    def destroy_bin(self, bin_id: int) -> None:
        """Release every object in the bin and remove the bin."""
        entries = self._bin(bin_id)
        for pos in range(len(entries)):
            self._log(f"[ + ] Destroyed Obj In Bin: {bin_id} @ Pos: {pos}")
        entries.clear()
        self._log(f"[ + ] Destroying Bin: {bin_id}")
        del self._bins[bin_id]

    def destroy(self) -> None:
        """Release every bin."""
        for bin_id in list(self._bins):
            self._bins[bin_id].clear()
        self._bins.clear()

    def bin_contents(self, bin_id: int) -> list[tuple[GarbageKind, Any]]:
        """The ``(kind, object)`` pairs held in the bin, in insertion order."""
        return list(self._bin(bin_id))