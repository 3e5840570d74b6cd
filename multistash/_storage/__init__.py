from .arena import SlotArena
from .slots import Free, Occupied, Slot

__all__ = ["SlotArena", "Free", "Occupied", "Slot"]
