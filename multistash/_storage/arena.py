import logging
import sys
from typing import Deque, Generic, Iterator, List, Optional, Tuple, cast

from multistash._storage.slots import Free, Occupied, Slot
from multistash._types import FreeLink, SlotIndex, V

logger = logging.getLogger(__name__)

MAX_SLOTS = sys.maxsize
MIN_GROWTH = 4


def _threaded(start: SlotIndex, count: int, tail: FreeLink) -> List[Slot[V]]:
    """Build `count` free slots starting at `start`, each linked to the next
    index and the last one linked to `tail`."""
    if count <= 0:
        return []
    slots: List[Slot[V]] = [Free(i + 1) for i in range(start, start + count - 1)]
    slots.append(Free(tail))
    return slots


class SlotArena(Generic[V]):
    """Dense array of slots with a free list threaded through the free ones.

    The arena never shrinks. Capacity is materialized as free slots, so
    ``capacity`` is simply the length of the slot array and growth is the
    only event that extends it.
    """

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self._slots: List[Slot[V]] = []
        self._free_head: FreeLink = None
        self._len_occupied = 0
        self._len_items = 0
        self.reallocations = 0
        if capacity:
            self._append_free(capacity)

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def free_head(self) -> FreeLink:
        return self._free_head

    @property
    def len_occupied(self) -> int:
        return self._len_occupied

    @property
    def len_items(self) -> int:
        return self._len_items

    def _append_free(self, count: int) -> None:
        start = len(self._slots)
        if count > MAX_SLOTS - start:
            raise OverflowError(
                f"cannot grow slot array of length {start} by {count} slots"
            )
        self._slots.extend(_threaded(start, count, self._free_head))
        self._free_head = start

    def _grow(self) -> None:
        additional = max(len(self._slots), MIN_GROWTH)
        self._append_free(additional)
        self.reallocations += 1
        logger.debug(
            "Grew slot array by %d to %d slots", additional, len(self._slots)
        )

    def reserve(self, additional: int) -> None:
        """Ensure `additional` more slots can be allocated without growth."""
        if additional < 0:
            raise ValueError(f"additional must be non-negative, got {additional}")
        vacant = len(self._slots) - self._len_occupied
        if additional > vacant:
            self._append_free(additional - vacant)
            self.reallocations += 1

    def allocate(self, values: Deque[V]) -> SlotIndex:
        """Pop the free-list head (growing first if the list is empty) and
        store `values` there."""
        if self._free_head is None:
            self._grow()
        index = cast(SlotIndex, self._free_head)
        slot = self._slots[index]
        if not isinstance(slot, Free):
            raise RuntimeError(f"free list head {index} is not a free slot")
        self._free_head = slot.next
        self._slots[index] = Occupied(values)
        self._len_occupied += 1
        self._len_items += len(values)
        return index

    def occupied(self, index: SlotIndex) -> Optional[Occupied[V]]:
        if 0 <= index < len(self._slots):
            slot = self._slots[index]
            if isinstance(slot, Occupied):
                return slot
        return None

    def append(self, index: SlotIndex, value: V) -> bool:
        slot = self.occupied(index)
        if slot is None:
            return False
        slot.values.append(value)
        self._len_items += 1
        return True

    def pop(self, index: SlotIndex, front: bool = False) -> Tuple[bool, Optional[V]]:
        """Remove one value from the slot at `index`.

        Returns ``(False, None)`` for an out-of-range or free slot. A slot
        left empty by the removal is released onto the free list.
        """
        slot = self.occupied(index)
        if slot is None:
            return False, None
        value = slot.values.popleft() if front else slot.values.pop()
        self._len_items -= 1
        if not slot.values:
            self.release(index)
        return True, value

    def release(self, index: SlotIndex) -> Optional[Deque[V]]:
        """Free the slot at `index` and push it as the new free-list head."""
        slot = self.occupied(index)
        if slot is None:
            return None
        self._slots[index] = Free(self._free_head)
        self._free_head = index
        self._len_occupied -= 1
        self._len_items -= len(slot.values)
        logger.debug("Released slot %d", index)
        return slot.values

    def iter_occupied(
        self, reverse: bool = False
    ) -> Iterator[Tuple[SlotIndex, Occupied[V]]]:
        indices = range(len(self._slots))
        for index in reversed(indices) if reverse else indices:
            slot = self._slots[index]
            if isinstance(slot, Occupied):
                yield index, slot

    def free_indices(self) -> Iterator[SlotIndex]:
        """Walk the free list from its head."""
        index = self._free_head
        while index is not None:
            yield index
            slot = self._slots[index]
            if not isinstance(slot, Free):
                raise RuntimeError(f"free list reaches occupied slot {index}")
            index = slot.next

    def reset(self) -> List[Slot[V]]:
        """Make every slot free again, keeping capacity.

        The free list is rethreaded in ascending index order. Returns the
        previous slot array so callers can consume what it held.
        """
        old = self._slots
        self._slots = _threaded(0, len(old), None) if old else []
        self._free_head = 0 if old else None
        self._len_occupied = 0
        self._len_items = 0
        return old


__all__ = ["SlotArena", "MAX_SLOTS", "MIN_GROWTH"]
