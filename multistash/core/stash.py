import logging
from collections import deque
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from multistash._storage import SlotArena
from multistash._types import V
from multistash.core.iter import Drain, Iter, IterMut
from multistash.core.key import Key
from multistash.core.utils import TakeOrder, _configure_logger, _validate_key
from multistash.core.views import ValuesView, ValuesViewMut
from multistash.exceptions import InvalidKeyError

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="MultiStash[Any]")


class MultiStash(Generic[V]):
    """
    Keyed container storing one or more values per reusable integer key.

    Slots freed by ``take_all`` (or by ``take_one`` removing the last value)
    are threaded into a free list and handed out again by the next ``put``,
    most recently freed first. ``put``, ``take_one``, ``take_all``, ``get``
    and ``get_mut`` are O(1); ``put`` is amortized because the slot array
    doubles when no free slot is left.

    The store is not thread safe. Use :class:`~multistash.LockedStash` or an
    external lock when sharing it between threads.

    Arguments:
        take_order: Which value ``take_one`` removes; ``TakeOrder.LIFO``
            (default) takes the most recently put value, ``TakeOrder.FIFO``
            the oldest.
        log_level: Logging level for the ``multistash`` logger.
        capacity: Number of slots to allocate up front.

    Raises:
        InvalidKeyError: If a value is put under a key that is out of range
            or has been freed.

    Examples:
        >>> stash = MultiStash[str]()
        >>> key = stash.put("a")
        >>> stash.put("b", key=key)
        Key(0)
        >>> stash.take_one(key)
        'b'
        >>> stash.take_all(key)
        ['a']
        >>> stash.put("c") == key
        True
    """

    def __init__(
        self,
        *,
        take_order: int = TakeOrder.LIFO,
        log_level: int = logging.WARNING,
        capacity: int = 0,
    ) -> None:
        """
        Initialize the stash.

        Raises:
            ValueError: If take_order is not a TakeOrder value, log_level is
                not a valid logging level or capacity is negative.
        """
        _configure_logger(log_level)
        self._take_order = TakeOrder(take_order)
        self._arena: SlotArena[V] = SlotArena(capacity)

    @classmethod
    def with_capacity(cls: Type[S], capacity: int, **kwargs: Any) -> S:
        """Create an empty stash with `capacity` free slots threaded up front,
        so the first `capacity` puts never grow the slot array."""
        return cls(capacity=capacity, **kwargs)

    @classmethod
    def from_iterable(cls: Type[S], values: Iterable[Any], **kwargs: Any) -> S:
        """Create a stash holding each of `values` under its own key."""
        stash = cls(**kwargs)
        stash.extend(values)
        return stash

    @property
    def take_order(self) -> TakeOrder:
        return self._take_order

    def put(self, value: V, key: Optional[Key] = None) -> Key:
        """
        Put `value` into the stash.

        Without `key` the value goes into a fresh slot: the head of the free
        list if there is one, otherwise a slot past the end of the array.
        With `key` the value is appended to the values already stored there.

        Returns:
            The key the value was stored under.

        Raises:
            InvalidKeyError: If `key` is out of range or addresses a free slot.
            TypeError: If `key` is not a Key.
        """
        if key is None:
            index = self._arena.allocate(deque((value,)))
            logger.debug("Put into new slot %d", index)
            return Key(index)
        index = _validate_key(key)
        if not self._arena.append(index, value):
            raise InvalidKeyError(f"Stash key {key!r} does not hold any values")
        return key

    def take_one(self, key: Key, default: Optional[V] = None) -> Optional[V]:
        """
        Remove and return one value stored under `key`.

        The value removed depends on ``take_order``. The slot is freed as
        soon as its last value is taken. Returns `default` if the key is out
        of range or free, so stored None values can be told apart by passing
        a sentinel.
        """
        index = _validate_key(key)
        found, value = self._arena.pop(
            index, front=self._take_order is TakeOrder.FIFO
        )
        return value if found else default

    def take_all(self, key: Key) -> List[V]:
        """
        Remove and return every value stored under `key` in insertion order,
        freeing the slot. Returns an empty list if the key is out of range or
        already free.
        """
        values = self._arena.release(_validate_key(key))
        return list(values) if values is not None else []

    def get(self, key: Key) -> Optional[ValuesView[V]]:
        """Return a read-only view of the values under `key`, or None."""
        slot = self._arena.occupied(_validate_key(key))
        return ValuesView(slot.values) if slot is not None else None

    def get_mut(self, key: Key) -> Optional[ValuesViewMut[V]]:
        """
        Return a view of the values under `key` that allows replacing them
        in place, or None.

        A view held across ``take_all`` of its key goes stale: it does not
        follow the slot once the slot is recycled for another put.
        """
        slot = self._arena.occupied(_validate_key(key))
        return ValuesViewMut(slot.values) if slot is not None else None

    def extend(self, values: Iterable[V]) -> List[Key]:
        """Put each of `values` under its own new key."""
        return [self.put(value) for value in values]

    def len_items(self) -> int:
        """Number of values across all keys."""
        return self._arena.len_items

    def is_empty(self) -> bool:
        return self._arena.len_occupied == 0

    def capacity(self) -> int:
        """Number of slots currently allocated, occupied or free."""
        return self._arena.capacity

    def reserve(self, additional: int) -> None:
        """
        Make room for at least `additional` more keys without growth.

        Raises:
            ValueError: If additional is negative.
        """
        self._arena.reserve(additional)

    def clear(self) -> None:
        """Remove every value, keeping the allocated slots for reuse."""
        self._arena.reset()
        logger.debug("Stash cleared")

    def iter(self) -> Iter[V]:
        return Iter(self._arena.iter_occupied(), self._arena.len_occupied)

    def iter_mut(self) -> IterMut[V]:
        return IterMut(self._arena.iter_occupied(), self._arena.len_occupied)

    def keys(self) -> Iterator[Key]:
        for key, _ in self.iter():
            yield key

    def drain(self) -> Drain[V]:
        """
        Move every ``(key, values)`` pair out of the stash.

        The stash is emptied immediately and keeps its capacity; the
        returned iterator yields the removed contents lazily and can only be
        consumed once.
        """
        remaining = self._arena.len_occupied
        slots = self._arena.reset()
        logger.debug("Draining %d occupied slots", remaining)
        return Drain(slots, remaining)

    def snapshot(self) -> Dict[Key, List[V]]:
        """Shallow copy of the stash contents keyed by Key."""
        return {key: view.to_list() for key, view in self.iter()}

    def __getitem__(self, key: Key) -> ValuesView[V]:
        view = self.get(key)
        if view is None:
            raise InvalidKeyError(f"Stash key {key!r} does not hold any values")
        return view

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, Key):
            return False
        return self._arena.occupied(key.index) is not None

    def __len__(self) -> int:
        return self._arena.len_occupied

    def __iter__(self) -> Iterator[Tuple[Key, ValuesView[V]]]:
        return self.iter()

    def __reversed__(self) -> Iterator[Tuple[Key, ValuesView[V]]]:
        return Iter(
            self._arena.iter_occupied(reverse=True), self._arena.len_occupied
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiStash):
            return NotImplemented
        return (
            self._take_order == other._take_order
            and self.snapshot() == other.snapshot()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        contents = {key.index: values for key, values in self.snapshot().items()}
        return f"{self.__class__.__name__}({contents!r})"


__all__ = ["MultiStash"]
