from typing import Optional, TypeVar

V = TypeVar("V")

# SlotIndex is a position in the slot array; FreeLink is the `next` pointer
# stored in a free slot (None marks the tail of the free list).
SlotIndex = int
FreeLink = Optional[SlotIndex]

__all__ = ["V", "SlotIndex", "FreeLink"]
