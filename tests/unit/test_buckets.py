import pytest

from mapsort.buckets import BucketMap
from mapsort.errors import TypeMismatchError


def test_bucket_map_groups_equal_keys_in_encounter_order():
    buckets = BucketMap()
    buckets.add(2, "D", "d")
    buckets.add(1, "A", "a")
    buckets.add(2, "F", "f")
    buckets.add(1, "B", "b")

    assert len(buckets) == 2
    assert list(buckets.entries()) == [("A", "a"), ("B", "b"), ("D", "d"), ("F", "f")]


def test_bucket_map_descending_reverses_buckets_only():
    buckets = BucketMap()
    for key, sort_key in [("x", 1), ("y", 3), ("z", 1), ("w", 2)]:
        buckets.add(sort_key, key, sort_key)

    assert [key for key, _ in buckets.entries(descending=True)] == ["y", "w", "x", "z"]


def test_bucket_map_puts_none_below_other_keys():
    buckets = BucketMap()
    buckets.add("b", 1, "b")
    buckets.add(None, 2, None)
    buckets.add("a", 3, "a")
    buckets.add(None, 4, None)

    assert [key for key, _ in buckets.entries()] == [2, 4, 3, 1]
    assert [key for key, _ in buckets.entries(descending=True)] == [1, 3, 2, 4]


def test_bucket_map_compares_incompatible_keys_lazily():
    buckets = BucketMap()
    buckets.add(1, "a", 1)

    with pytest.raises(TypeMismatchError) as exc_info:
        buckets.add(b"bytes", "b", b"bytes")

    assert exc_info.value.left == b"bytes"
    assert exc_info.value.right == 1


def test_bucket_map_rejects_lone_unorderable_key():
    lone = object()

    with pytest.raises(TypeMismatchError) as exc_info:
        BucketMap().add(lone, "a", None)

    assert exc_info.value.left is lone
    assert exc_info.value.right is lone


def test_bucket_map_rejects_unorderable_key_next_to_none():
    buckets = BucketMap()
    buckets.add(None, "a", None)

    with pytest.raises(TypeMismatchError):
        buckets.add(object(), "b", None)


def test_bucket_map_reports_the_incompatible_existing_key():
    buckets = BucketMap()
    buckets.add("a", 1, "a")
    buckets.add(None, 2, None)
    buckets.add("c", 3, "c")

    with pytest.raises(TypeMismatchError) as exc_info:
        buckets.add(5, 4, 5)

    assert exc_info.value.left == 5
    assert exc_info.value.right == "a"
    assert "'a' of type str" in str(exc_info.value)
