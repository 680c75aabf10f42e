"""Open-set priority structures for the A* search.

Every frontier orders cell indices by priority and breaks ties on the lowest
index, so two runs over the same grid expand cells in the same order.
"""

from __future__ import annotations

import bisect
from heapq import heappop, heappush
from typing import Dict, List, Optional, Protocol, Tuple

from .errors import AllocationError

Entry = Tuple[float, int]


class Frontier(Protocol):
    """Operations the search engine needs from an open set."""

    def insert(self, index: int, priority: float) -> None: ...

    def extract_min(self) -> Optional[int]: ...

    def contains(self, index: int) -> bool: ...

    def decrease_priority(self, index: int, new_priority: float) -> None: ...

    def __len__(self) -> int: ...


class HeapFrontier:
    """Binary heap keyed on ``(priority, index)`` with lazy deletion.

    ``_priority`` maps every live index to its current priority. Heap entries
    whose priority no longer matches are tombstones and are skipped on
    extraction.
    """

    def __init__(self) -> None:
        self._heap: List[Entry] = []
        self._priority: Dict[int, float] = {}

    def __len__(self) -> int:
        return len(self._priority)

    def __bool__(self) -> bool:
        return bool(self._priority)

    def contains(self, index: int) -> bool:
        return index in self._priority

    def insert(self, index: int, priority: float) -> None:
        """Add ``index``; a second insert supersedes the earlier priority."""
        try:
            heappush(self._heap, (priority, index))
            self._priority[index] = priority
        except MemoryError as exc:
            raise AllocationError("frontier could not grow") from exc

    def decrease_priority(self, index: int, new_priority: float) -> None:
        current = self._priority.get(index)
        if current is None:
            raise KeyError(index)
        if new_priority > current:
            raise ValueError(
                f"new priority {new_priority} is higher than current {current} for cell {index}"
            )
        if new_priority < current:
            self.insert(index, new_priority)

    def extract_min(self) -> Optional[int]:
        while self._heap:
            priority, index = heappop(self._heap)
            if self._priority.get(index) == priority:
                del self._priority[index]
                return index
        return None


class SortedListFrontier:
    """Open set kept as a sorted list.

    Extraction takes the head of the list, insertion is linear. Only
    worthwhile for small grids.
    """

    def __init__(self) -> None:
        self._entries: List[Entry] = []
        self._priority: Dict[int, float] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def contains(self, index: int) -> bool:
        return index in self._priority

    def insert(self, index: int, priority: float) -> None:
        """Add ``index``; a second insert supersedes the earlier priority.

        The stale entry is only dropped once the new one is in place, so a
        failed insert leaves the frontier unchanged.
        """
        old = self._priority.get(index)
        try:
            bisect.insort(self._entries, (priority, index))
        except MemoryError as exc:
            raise AllocationError("frontier could not grow") from exc
        if old is not None:
            del self._entries[bisect.bisect_left(self._entries, (old, index))]
        self._priority[index] = priority

    def decrease_priority(self, index: int, new_priority: float) -> None:
        current = self._priority.get(index)
        if current is None:
            raise KeyError(index)
        if new_priority > current:
            raise ValueError(
                f"new priority {new_priority} is higher than current {current} for cell {index}"
            )
        if new_priority < current:
            self.insert(index, new_priority)

    def extract_min(self) -> Optional[int]:
        if not self._entries:
            return None
        _, index = self._entries.pop(0)
        del self._priority[index]
        return index


FRONTIERS = {
    "heap": HeapFrontier,
    "sorted_list": SortedListFrontier,
}


def make_frontier(kind: str = "heap") -> Frontier:
    """Return an empty frontier of the named ``kind``."""

    try:
        cls = FRONTIERS[kind]
    except KeyError:
        raise ValueError(
            f"unknown frontier {kind!r}; expected one of {', '.join(sorted(FRONTIERS))}"
        ) from None
    return cls()


__all__ = [
    "Frontier",
    "HeapFrontier",
    "SortedListFrontier",
    "FRONTIERS",
    "make_frontier",
]
