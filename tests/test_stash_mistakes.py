import pytest

from multistash import InvalidKeyError, Key, MultiStash, StashError


def test_put_under_unknown_key_raises() -> None:
    s: MultiStash[int] = MultiStash()
    with pytest.raises(InvalidKeyError):
        s.put(1, key=Key(0))
    assert s.is_empty()


def test_put_under_freed_key_raises() -> None:
    s: MultiStash[int] = MultiStash()
    k = s.put(1)
    s.take_all(k)
    with pytest.raises(InvalidKeyError):
        s.put(2, key=k)
    assert s.len_items() == 0


def test_put_under_key_beyond_capacity_raises() -> None:
    s: MultiStash[int] = MultiStash.with_capacity(4)
    with pytest.raises(InvalidKeyError):
        s.put(1, key=Key(9999))


def test_invalid_key_error_is_a_lookup_error() -> None:
    assert issubclass(InvalidKeyError, StashError)
    assert issubclass(InvalidKeyError, LookupError)


def test_access_before_put_returns_absent() -> None:
    s: MultiStash[str] = MultiStash()
    for key in (Key(0), Key(9999)):
        assert s.get(key) is None
        assert s.get_mut(key) is None
        assert s.take_one(key) is None
        assert s.take_all(key) == []
        assert key not in s
    assert s.is_empty()


def test_access_to_freed_key_returns_absent() -> None:
    s: MultiStash[str] = MultiStash()
    s.put("keep")
    k = s.put("gone")
    assert s.take_one(k) == "gone"
    assert s.get(k) is None
    assert s.get_mut(k) is None
    assert s.take_one(k) is None
    assert s.take_all(k) == []
    assert len(s) == 1


def test_getitem_on_missing_key_raises() -> None:
    s: MultiStash[str] = MultiStash()
    with pytest.raises(InvalidKeyError):
        _ = s[Key(3)]


def test_non_key_arguments_raise_type_error() -> None:
    s: MultiStash[int] = MultiStash()
    s.put(1)
    with pytest.raises(TypeError):
        s.get(0)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        s.take_one("0")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        s.put(2, key=0)  # type: ignore[arg-type]
    assert 0 not in s


def test_reserve_negative_raises() -> None:
    s: MultiStash[int] = MultiStash()
    with pytest.raises(ValueError):
        s.reserve(-1)


def test_growth_past_index_limit_overflows(monkeypatch: pytest.MonkeyPatch) -> None:
    from multistash._storage import arena

    monkeypatch.setattr(arena, "MAX_SLOTS", 6)
    s: MultiStash[int] = MultiStash()
    for i in range(4):
        s.put(i)
    with pytest.raises(OverflowError):
        s.put(4)
    assert len(s) == 4
