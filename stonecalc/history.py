"""
Append-only, owner-partitioned calculation history.

HistoryLog is an immutable sequence, newest first, bounded to a fixed
capacity shared by all owners. Appending returns a new log with the oldest
entries beyond capacity dropped; entries are never edited, and the only
removal besides eviction is a bulk clear of one owner's entries.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from .schemas import CalculationResult, HistoryItem

DEFAULT_CAPACITY = 100


def new_history_item(result: CalculationResult, owner_mobile: Optional[str] = None,
                     label: Optional[str] = None, timestamp: Optional[int] = None) -> HistoryItem:
    """Stamp a result with an id and creation time."""
    return HistoryItem(
        **result.model_dump(include=set(CalculationResult.model_fields)),
        id=uuid.uuid4().hex[:12],
        timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
        label=label,
        user_mobile=owner_mobile,
    )


@dataclass(frozen=True)
class HistoryLog:
    items: Tuple[HistoryItem, ...] = ()
    capacity: int = DEFAULT_CAPACITY

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {self.capacity}")
        # Normalize lists and enforce the bound on construction too
        object.__setattr__(self, "items", tuple(self.items)[:self.capacity])

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def append(self, item: HistoryItem) -> "HistoryLog":
        """New log with item first; oldest entries beyond capacity are dropped."""
        return HistoryLog(items=(item,) + self.items[:self.capacity - 1], capacity=self.capacity)

    def for_owner(self, owner_mobile: Optional[str]) -> Tuple[HistoryItem, ...]:
        """Entries belonging to one owner, newest first. None selects anonymous entries."""
        return tuple(item for item in self.items if item.user_mobile == owner_mobile)

    def clear_owner(self, owner_mobile: Optional[str]) -> "HistoryLog":
        """New log without the owner's entries. No owner, nothing to clear."""
        if owner_mobile is None:
            return self
        return HistoryLog(
            items=tuple(item for item in self.items if item.user_mobile != owner_mobile),
            capacity=self.capacity,
        )

    def next_label(self, owner_mobile: Optional[str], title: str) -> str:
        """'<title> <n>' where n is the owner's next entry number."""
        return f"{title} {len(self.for_owner(owner_mobile)) + 1}"

    def evicted_by(self, newer: "HistoryLog") -> Tuple[HistoryItem, ...]:
        """Entries present here but missing from newer."""
        kept = {item.id for item in newer.items}
        return tuple(item for item in self.items if item.id not in kept)
