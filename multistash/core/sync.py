import contextlib
from threading import RLock
from typing import Any, ContextManager, Dict, Iterator, List, Optional

from multistash._types import V
from multistash.core.iter import Drain, Iter, IterMut
from multistash.core.key import Key
from multistash.core.stash import MultiStash
from multistash.core.utils import _validate_lock, locked_method
from multistash.core.views import ValuesView, ValuesViewMut


class LockedStash(MultiStash[V]):
    """
    MultiStash whose operations run under a lock.

    Iterators are materialized while holding the lock, so they are
    snapshots; ``drain`` detaches the slot array under the lock. The lock
    must be reentrant because ``bulk`` holds it across locked calls. Views
    returned by ``get``/``get_mut`` are not protected once the call returns;
    hold :meth:`bulk` while using them if other threads may touch the same
    key.

    Arguments:
        lock: Optional reentrant lock. If None, a new RLock is created.
        **kwargs: Passed on to :class:`MultiStash`.

    Examples:
        >>> stash = LockedStash[int]()
        >>> with stash.bulk() as s:
        ...     key = s.put(1)
        ...     _ = s.put(2, key=key)
        >>> stash.take_all(key)
        [1, 2]
    """

    def __init__(self, *, lock: Optional[RLock] = None, **kwargs: Any) -> None:
        """
        Raises:
            TypeError: If the provided lock does not implement the lock protocol
                or is not reentrant.
        """
        _validate_lock(lock)
        self._lock: RLock = lock or RLock()
        super().__init__(**kwargs)

    @locked_method
    def put(self, value: V, key: Optional[Key] = None) -> Key:
        return super().put(value, key)

    @locked_method
    def take_one(self, key: Key, default: Optional[V] = None) -> Optional[V]:
        return super().take_one(key, default)

    @locked_method
    def take_all(self, key: Key) -> List[V]:
        return super().take_all(key)

    @locked_method
    def get(self, key: Key) -> Optional[ValuesView[V]]:
        return super().get(key)

    @locked_method
    def get_mut(self, key: Key) -> Optional[ValuesViewMut[V]]:
        return super().get_mut(key)

    @locked_method
    def extend(self, values: Any) -> List[Key]:
        return super().extend(values)

    @locked_method
    def reserve(self, additional: int) -> None:
        super().reserve(additional)

    @locked_method
    def clear(self) -> None:
        super().clear()

    @locked_method
    def iter(self) -> Iter[V]:
        return Iter(list(self._arena.iter_occupied()), self._arena.len_occupied)

    @locked_method
    def iter_mut(self) -> IterMut[V]:
        return IterMut(
            list(self._arena.iter_occupied()), self._arena.len_occupied
        )

    @locked_method
    def drain(self) -> Drain[V]:
        return super().drain()

    @locked_method
    def snapshot(self) -> Dict[Key, List[V]]:
        return super().snapshot()

    @locked_method
    def len_items(self) -> int:
        return super().len_items()

    @locked_method
    def __reversed__(self) -> Iter[V]:
        return Iter(
            list(self._arena.iter_occupied(reverse=True)), self._arena.len_occupied
        )

    @locked_method
    def __contains__(self, key: object) -> bool:
        return super().__contains__(key)

    @locked_method
    def __len__(self) -> int:
        return super().__len__()

    @locked_method
    def __repr__(self) -> str:
        return super().__repr__()

    def bulk(self) -> ContextManager["LockedStash[V]"]:
        """
        Context manager holding the lock across several operations.

        Usage:
            with stash.bulk() as s:
                key = s.put(a)
                s.put(b, key=key)
        """

        @contextlib.contextmanager
        def _bulk_ctx() -> Iterator[LockedStash[V]]:
            self._lock.acquire()
            try:
                yield self
            finally:
                self._lock.release()

        return _bulk_ctx()

    def __getstate__(self) -> Dict[str, Any]:
        state = self.__dict__.copy()
        del state["_lock"]
        return state

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._lock = RLock()


__all__ = ["LockedStash"]
