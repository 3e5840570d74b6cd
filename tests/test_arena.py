from collections import deque

import pytest

from multistash._storage import Free, Occupied, SlotArena


def test_new_arena_is_empty() -> None:
    arena: SlotArena[int] = SlotArena()
    assert arena.capacity == 0
    assert arena.free_head is None
    assert list(arena.free_indices()) == []


def test_allocate_grows_when_free_list_is_empty() -> None:
    arena: SlotArena[int] = SlotArena()
    assert arena.allocate(deque([1])) == 0
    assert arena.capacity == 4
    assert arena.reallocations == 1
    assert list(arena.free_indices()) == [1, 2, 3]


def test_release_pushes_new_free_head() -> None:
    arena: SlotArena[int] = SlotArena(3)
    for i in range(3):
        arena.allocate(deque([i]))
    assert arena.free_head is None
    assert list(arena.release(1) or []) == [1]
    assert arena.release(1) is None
    assert list(arena.release(0) or []) == [0]
    assert list(arena.free_indices()) == [0, 1]
    assert arena.len_occupied == 1


def test_pop_releases_emptied_slot() -> None:
    arena: SlotArena[str] = SlotArena(2)
    index = arena.allocate(deque(["a", "b"]))
    assert arena.len_items == 2
    assert arena.pop(index) == (True, "b")
    assert arena.pop(index, front=True) == (True, "a")
    assert arena.pop(index) == (False, None)
    assert arena.occupied(index) is None
    assert arena.free_head == index
    assert arena.len_items == 0


def test_occupied_ignores_out_of_range_indexes() -> None:
    arena: SlotArena[int] = SlotArena(2)
    arena.allocate(deque([7]))
    assert isinstance(arena.occupied(0), Occupied)
    assert arena.occupied(1) is None
    assert arena.occupied(2) is None
    assert arena.append(5, 1) is False


def test_reset_rethreads_every_slot() -> None:
    arena: SlotArena[int] = SlotArena()
    for i in range(6):
        arena.allocate(deque([i]))
    arena.release(2)
    old = arena.reset()
    assert sum(isinstance(slot, Occupied) for slot in old) == 5
    assert arena.capacity == len(old)
    assert list(arena.free_indices()) == list(range(arena.capacity))
    assert all(isinstance(slot, Free) for slot in arena._slots)
    assert arena.len_occupied == 0


def test_negative_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        SlotArena(-1)


def test_corrupted_free_list_raises() -> None:
    arena: SlotArena[int] = SlotArena(2)
    arena._slots[0] = Occupied(deque([1]))
    with pytest.raises(RuntimeError):
        list(arena.free_indices())
    with pytest.raises(RuntimeError):
        arena.allocate(deque([2]))
