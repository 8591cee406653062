import pytest

from sysstats.exceptions import MissingEntityError, SysStatsError
from sysstats.snapshot import Snapshot, derive_keyed, per_second


def test_snapshot_is_read_only_mapping():
    source = {"a": 1, "b": 2}
    snapshot = Snapshot(source, 12.5)
    source["c"] = 3

    assert dict(snapshot) == {"a": 1, "b": 2}
    assert len(snapshot) == 2
    assert snapshot.timestamp == 12.5
    with pytest.raises(TypeError):
        snapshot["a"] = 5  # type: ignore[index]
    with pytest.raises(AttributeError):
        snapshot.timestamp = 1.0  # type: ignore[misc]


def test_snapshot_equality_includes_timestamp():
    assert Snapshot({"a": 1}, 1.0) == Snapshot({"a": 1}, 1.0)
    assert Snapshot({"a": 1}, 1.0) != Snapshot({"a": 1}, 2.0)


def test_derive_keyed_uses_second_keys_and_timestamp():
    first = Snapshot({"a": 1, "b": 2, "old": 9}, 10.0)
    second = Snapshot({"a": 4, "b": 2}, 20.0)
    derived = derive_keyed(first, second, lambda x, y: y - x, "test")
    assert dict(derived) == {"a": 3, "b": 0}
    assert derived.timestamp == 20.0


def test_derive_keyed_missing_entity():
    first = Snapshot({"a": 1}, 10.0)
    second = Snapshot({"a": 1, "new": 1}, 20.0)
    with pytest.raises(MissingEntityError) as excinfo:
        derive_keyed(first, second, lambda x, y: y - x, "test")
    assert isinstance(excinfo.value, SysStatsError)
    assert isinstance(excinfo.value, KeyError)
    assert "'new'" in str(excinfo.value)


def test_per_second():
    assert per_second(1000, 10) == 100.0
    assert per_second(0, 0) == 0.0
    assert per_second(-10, 5) == -2.0
