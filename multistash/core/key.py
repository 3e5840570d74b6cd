from functools import total_ordering
from typing import Any


@total_ordering
class Key:
    """Handle to a slot of a :class:`~multistash.MultiStash`.

    Keys are plain slot indexes. Once a slot is freed by ``take_all`` (or by
    ``take_one`` draining it) the same index may be handed out again by a
    later ``put``, so a cached key must not be trusted across that cycle.
    """

    __slots__ = ("_index",)

    def __init__(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Key index must be an int, got {type(index)}")
        if index < 0:
            raise ValueError(f"Key index must be non-negative, got {index}")
        object.__setattr__(self, "_index", index)

    @property
    def index(self) -> int:
        return self._index

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __int__(self) -> int:
        return self._index

    def __index__(self) -> int:
        return self._index

    def __hash__(self) -> int:
        return hash((Key, self._index))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Key):
            return self._index == other._index
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Key):
            return self._index < other._index
        return NotImplemented

    def __repr__(self) -> str:
        return f"Key({self._index})"

    def __reduce__(self) -> Any:
        return (Key, (self._index,))


__all__ = ["Key"]
