"""Generation-checked storage for world entities.

Cities and aliens reference each other through ``Handle`` values instead of
object references. Removing an entry bumps the generation of its slot, so any
handle still pointing at it resolves to ``None`` rather than to a dead object
or to whatever reuses the slot later.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Handle:
    """Stable address of an arena entry."""

    index: int
    generation: int


@dataclass(slots=True)
class _Slot(Generic[T]):
    generation: int = 0
    item: T | None = None


class StaleHandleError(KeyError):
    """Raised when a handle points at an entry that was removed."""


class Arena(Generic[T]):
    """Slot list with free-list reuse and generation checks."""

    def __init__(self) -> None:
        self._slots: list[_Slot[T]] = []
        self._free: list[int] = []
        self._live = 0

    def insert(self, item: T) -> Handle:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
        else:
            index = len(self._slots)
            slot = _Slot()
            self._slots.append(slot)
        slot.item = item
        self._live += 1
        return Handle(index=index, generation=slot.generation)

    def get(self, handle: Handle | None) -> T | None:
        """Return the live entry for ``handle`` or ``None`` if it is gone."""
        if handle is None or handle.index >= len(self._slots):
            return None
        slot = self._slots[handle.index]
        if slot.generation != handle.generation:
            return None
        return slot.item

    def remove(self, handle: Handle) -> T:
        item = self[handle]
        slot = self._slots[handle.index]
        slot.item = None
        slot.generation += 1
        self._free.append(handle.index)
        self._live -= 1
        return item

    def handles(self) -> list[Handle]:
        """Snapshot of live handles in slot order."""
        return [
            Handle(index=index, generation=slot.generation)
            for index, slot in enumerate(self._slots)
            if slot.item is not None
        ]

    def __getitem__(self, handle: Handle) -> T:
        item = self.get(handle)
        if item is None:
            raise StaleHandleError(f"Handle no longer refers to a live entry: {handle}")
        return item

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, Handle) and self.get(handle) is not None

    def __iter__(self) -> Iterator[T]:
        for slot in self._slots:
            if slot.item is not None:
                yield slot.item

    def __len__(self) -> int:
        return self._live
