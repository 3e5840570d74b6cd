from typing import Generic, Iterable, Iterator, List, Tuple, cast

from multistash._storage.slots import Occupied, Slot
from multistash._types import V
from multistash.core.key import Key
from multistash.core.views import ValuesView, ValuesViewMut


class Iter(Generic[V]):
    """Iterator over ``(Key, ValuesView)`` pairs of the occupied slots.

    Created by :meth:`MultiStash.iter` from the arena's occupied slots,
    either lazily or from a list materialized under a lock. `remaining` is
    the number of pairs `slots` will yield. Mutating the stash while
    iterating a lazy one is not supported.
    """

    def __init__(
        self, slots: Iterable[Tuple[int, "Occupied[V]"]], remaining: int
    ) -> None:
        self._remaining = remaining
        self._iter = iter(slots)

    def _view(self, slot: "Occupied[V]") -> ValuesView[V]:
        return ValuesView(slot.values)

    def __iter__(self) -> "Iter[V]":
        return self

    def __next__(self) -> Tuple[Key, ValuesView[V]]:
        index, slot = next(self._iter)
        self._remaining -= 1
        return Key(index), self._view(slot)

    def __len__(self) -> int:
        return self._remaining

    def __length_hint__(self) -> int:
        return self._remaining


class IterMut(Iter[V]):
    """Like :class:`Iter` but yields :class:`ValuesViewMut` views."""

    def _view(self, slot: "Occupied[V]") -> ValuesViewMut[V]:
        return ValuesViewMut(slot.values)

    def __next__(self) -> Tuple[Key, ValuesViewMut[V]]:  # type: ignore[override]
        return cast(Tuple[Key, ValuesViewMut[V]], super().__next__())


class Drain(Generic[V]):
    """One-shot iterator moving ``(Key, list of values)`` out of a stash.

    The stash is reset when the drain is created, so it can be reused
    straight away; the drain walks the slot array it took over.
    """

    def __init__(self, slots: List[Slot[V]], remaining: int) -> None:
        self._remaining = remaining
        self._iter = self._occupied(slots)

    @staticmethod
    def _occupied(slots: List[Slot[V]]) -> Iterator[Tuple[int, "Occupied[V]"]]:
        for index, slot in enumerate(slots):
            if isinstance(slot, Occupied):
                yield index, slot
        slots.clear()

    def __iter__(self) -> "Drain[V]":
        return self

    def __next__(self) -> Tuple[Key, List[V]]:
        index, slot = next(self._iter)
        self._remaining -= 1
        return Key(index), list(slot.values)

    def __len__(self) -> int:
        return self._remaining

    def __length_hint__(self) -> int:
        return self._remaining


__all__ = ["Iter", "IterMut", "Drain"]
