"""Ordered grouping of entries by sort key."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from sortedcontainers import SortedKeyList

from mapsort.errors import TypeMismatchError

K = TypeVar("K")
V = TypeVar("V")


class _Bucket(Generic[K, V]):
    __slots__ = ("sort_key", "rank", "entries")

    def __init__(self, sort_key: object) -> None:
        self.sort_key = sort_key
        # None ranks below everything and is never compared with `<`.
        self.rank = (sort_key is not None, sort_key)
        self.entries: list[tuple[K, V]] = []


def _bucket_rank(bucket: _Bucket) -> tuple[bool, object]:
    return bucket.rank


class BucketMap(Generic[K, V]):
    """Sort keys mapped to the entries sharing them, in encounter order.

    Keys are only compared with ``<`` so they need not be hashable. Two keys
    land in the same bucket when neither is less than the other. A
    ``TypeError`` from a comparison surfaces as ``TypeMismatchError`` at the
    insertion that triggered it.
    """

    def __init__(self) -> None:
        self._buckets: SortedKeyList = SortedKeyList(key=_bucket_rank)

    def __len__(self) -> int:
        return len(self._buckets)

    def add(self, sort_key: object, key: K, value: V) -> None:
        try:
            self._bucket_for(sort_key).entries.append((key, value))
        except TypeError as exc:
            raise TypeMismatchError(sort_key, self._incomparable_with(sort_key)) from exc

    def _incomparable_with(self, sort_key: object) -> object:
        rank = (sort_key is not None, sort_key)
        for bucket in self._buckets:
            try:
                rank < bucket.rank
                bucket.rank < rank
            except TypeError:
                return bucket.sort_key
        # Only the self-check failed.
        return sort_key

    def _bucket_for(self, sort_key: object) -> _Bucket[K, V]:
        rank = (sort_key is not None, sort_key)
        pos = self._buckets.bisect_key_left(rank)
        if pos < len(self._buckets):
            candidate = self._buckets[pos]
            if not rank < candidate.rank:
                return candidate

        if sort_key is not None:
            # New keys are checked against themselves so a lone unorderable key still fails.
            sort_key < sort_key
        bucket: _Bucket[K, V] = _Bucket(sort_key)
        self._buckets.add(bucket)
        return bucket

    def entries(self, *, descending: bool = False) -> Iterator[tuple[K, V]]:
        buckets = reversed(self._buckets) if descending else iter(self._buckets)
        for bucket in buckets:
            yield from bucket.entries
