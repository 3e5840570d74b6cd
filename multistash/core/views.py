from itertools import islice
from typing import Any, Deque, Generic, Iterator, List, Sequence, Union, overload

from multistash._types import V


class ValuesView(Sequence[V], Generic[V]):
    """Read-only live view of the values stored under one key.

    The view wraps the slot's value sequence directly, so it reflects later
    puts and takes on the same key. Growth of the slot array never
    invalidates it. Once the key is freed the view is stale: it keeps showing
    the sequence the slot held at that point, not whatever is put under a
    recycled key afterwards.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Deque[V]) -> None:
        self._values = values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[V]:
        return iter(self._values)

    def __reversed__(self) -> Iterator[V]:
        return reversed(self._values)

    @overload
    def __getitem__(self, index: int) -> V: ...

    @overload
    def __getitem__(self, index: slice) -> List[V]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[V, List[V]]:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self._values))
            if step > 0:
                return list(islice(self._values, start, stop, step))
            return list(self._values)[index]
        return self._values[index]

    def __contains__(self, item: object) -> bool:
        return item in self._values

    def __bool__(self) -> bool:
        return bool(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValuesView):
            return bool(list(self._values) == list(other._values))
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return bool(list(self._values) == list(other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_list(self) -> List[V]:
        return list(self._values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._values)!r})"


class ValuesViewMut(ValuesView[V]):
    """Live view that allows replacing values in place.

    Only item assignment is offered. Adding or removing values must go
    through ``put``/``take_one``/``take_all`` so the free list stays
    consistent with which slots are empty.
    """

    __slots__ = ()

    def __setitem__(self, index: int, value: V) -> None:
        if isinstance(index, slice):
            raise TypeError("slice assignment could change the number of values")
        self._values[index] = value

    def __delitem__(self, index: Any) -> None:
        raise TypeError(
            "values cannot be removed through a view; use take_one or take_all"
        )


__all__ = ["ValuesView", "ValuesViewMut"]
