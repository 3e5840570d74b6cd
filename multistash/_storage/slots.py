from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Generic, Union

from multistash._types import FreeLink, V


@dataclass
class Occupied(Generic[V]):
    """A slot holding the values put under its key, oldest first."""

    values: Deque[V] = field(default_factory=deque)

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class Free:
    """A slot linked into the free list; `next` is the following free slot."""

    next: FreeLink = None


Slot = Union[Occupied[V], Free]

__all__ = ["Occupied", "Free", "Slot"]
