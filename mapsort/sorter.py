"""Sort a mapping by its values, or by a property of its values.

The result is a new ``dict`` whose iteration order follows the sort keys.
Entries with equal sort keys keep the order in which they were met while
iterating the source mapping, in both ascending and descending order. For a
plain ``dict`` source that is insertion order.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Generic, Mapping, Protocol, TypeVar, Union

from mapsort.buckets import BucketMap
from mapsort.errors import ConfigError, MapSortError
from mapsort.logging import log_event
from mapsort.time_utils import elapsed_ms

if TYPE_CHECKING:
    from mapsort.config_loader import SorterConfig

K = TypeVar("K")
V = TypeVar("V")
V_contra = TypeVar("V_contra", contravariant=True)
P_co = TypeVar("P_co", covariant=True)

_DEFAULT_LOGGER = logging.getLogger("mapsort.sorter")


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class PropertyProvider(Protocol[V_contra, P_co]):
    """Object that returns the property of a value to sort by."""

    def get_property(self, item: V_contra) -> P_co:
        ...


Extractor = Union[Callable[[V], object], PropertyProvider[V, object]]


def _as_callable(extractor: Extractor) -> Callable[[V], object]:
    get_property = getattr(extractor, "get_property", None)
    if callable(get_property):
        return get_property
    if callable(extractor):
        return extractor
    raise TypeError(f"Expected a callable or property provider, got {type(extractor).__name__}")


@dataclass(frozen=True)
class MapSorter(Generic[K, V]):
    """Builds value-ordered copies of a mapping.

    The source mapping is held by reference; changes made to it show up in
    later sorts. A sorter never changes after construction: ``descending()``
    and ``ascending()`` return a new sorter over the same source, so

        MapSorter(scores).descending().sort_by_value()

    sorts once in descending order and leaves the original sorter ascending.
    """

    source: Mapping[K, V]
    order: SortOrder = SortOrder.ASCENDING
    logger: logging.Logger = field(default=_DEFAULT_LOGGER, repr=False, compare=False)

    @classmethod
    def from_config(
        cls,
        source: Mapping[K, V],
        config: SorterConfig,
        *,
        logger: logging.Logger | None = None,
    ) -> MapSorter[K, V]:
        try:
            order = SortOrder(config.default_order)
        except ValueError as exc:
            raise ConfigError(f"Unknown sort order in config: {config.default_order!r}") from exc
        return cls(source, order=order, logger=logger or _DEFAULT_LOGGER)

    def descending(self) -> MapSorter[K, V]:
        return replace(self, order=SortOrder.DESCENDING)

    def ascending(self) -> MapSorter[K, V]:
        return replace(self, order=SortOrder.ASCENDING)

    def sort_by_value(self) -> dict[K, V]:
        """Return the source entries ordered by value.

        Raises:
            TypeMismatchError: if two values cannot be compared with ``<``.
        """
        return self._build("value", lambda value: value)

    def sort_by_property(self, extractor: Extractor) -> dict[K, V]:
        """Return the source entries ordered by ``extractor(value)``.

        ``extractor`` is a callable or an object with ``get_property``. It is
        called exactly once per entry.

        Raises:
            TypeMismatchError: if two extracted properties cannot be compared.
        """
        return self._build("property", _as_callable(extractor))

    def _build(self, mode: str, sort_key_of: Callable[[V], object]) -> dict[K, V]:
        started_at = time.perf_counter()
        entries_in = len(self.source)
        log_event(
            self.logger,
            "sort start",
            level=logging.DEBUG,
            event="SORT_START",
            status="ok",
            order=self.order.value,
            mode=mode,
            entries_in=entries_in,
        )

        buckets: BucketMap[K, V] = BucketMap()
        try:
            for key, value in self.source.items():
                buckets.add(sort_key_of(value), key, value)
        except MapSortError as exc:
            log_event(
                self.logger,
                f"sort failed: {exc}",
                level=logging.WARNING,
                event="SORT_FAIL",
                status="error",
                order=self.order.value,
                mode=mode,
                entries_in=entries_in,
                duration_ms=elapsed_ms(started_at),
                error_code=exc.error_code,
            )
            raise

        result = dict(buckets.entries(descending=self.order is SortOrder.DESCENDING))

        log_event(
            self.logger,
            "sort end",
            level=logging.DEBUG,
            event="SORT_END",
            status="ok",
            order=self.order.value,
            mode=mode,
            entries_in=entries_in,
            entries_out=len(result),
            buckets=len(buckets),
            duration_ms=elapsed_ms(started_at),
        )
        return result


def sort_by_value(source: Mapping[K, V], *, descending: bool = False) -> dict[K, V]:
    order = SortOrder.DESCENDING if descending else SortOrder.ASCENDING
    return MapSorter(source, order=order).sort_by_value()


def sort_by_property(source: Mapping[K, V], extractor: Extractor, *, descending: bool = False) -> dict[K, V]:
    order = SortOrder.DESCENDING if descending else SortOrder.ASCENDING
    return MapSorter(source, order=order).sort_by_property(extractor)
