import pickle

import pytest

from multistash import Key


def test_key_exposes_its_index() -> None:
    k = Key(3)
    assert k.index == 3
    assert int(k) == 3
    assert ["a", "b", "c", "d"][k] == "d"


def test_keys_compare_and_hash_by_index() -> None:
    assert Key(1) == Key(1)
    assert Key(1) != Key(2)
    assert sorted([Key(2), Key(0), Key(1)]) == [Key(0), Key(1), Key(2)]
    assert len({Key(1), Key(1), Key(2)}) == 2
    assert Key(1) != 1


def test_key_is_immutable() -> None:
    k = Key(0)
    with pytest.raises(AttributeError):
        k._index = 5  # type: ignore[misc]


def test_key_rejects_bad_indexes() -> None:
    with pytest.raises(ValueError):
        Key(-1)
    with pytest.raises(TypeError):
        Key("1")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Key(True)


def test_key_pickles() -> None:
    assert pickle.loads(pickle.dumps(Key(7))) == Key(7)
    assert repr(Key(7)) == "Key(7)"
