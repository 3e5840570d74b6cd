from .key import Key
from .stash import MultiStash
from .sync import LockedStash
from .utils import TakeOrder
from .views import ValuesView, ValuesViewMut

__all__ = [
    "Key",
    "MultiStash",
    "LockedStash",
    "TakeOrder",
    "ValuesView",
    "ValuesViewMut",
]
