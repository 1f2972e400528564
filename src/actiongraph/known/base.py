"""Base class for the per-type interning caches."""

from typing import Generic, TypeVar

from actiongraph.intern import InternStats, InterningCache

K = TypeVar("K")
V = TypeVar("V")


class KnownCache(Generic[K, V]):
    """Thin typed front for one InterningCache.

    Subclasses build the InterningCache in ``__init__`` with their own
    construct and publish functions and assign it to ``self.cache``; this
    class only forwards the lookups.
    """

    cache: InterningCache[K, V]

    def data_to_id(self, data: K) -> int:
        """Return the id for data, publishing its message on first sight."""
        return self.cache.data_to_id(data)

    def lookup(self, data: K) -> int | None:
        return self.cache.lookup(data)

    @property
    def stats(self) -> InternStats:
        return self.cache.stats

    def __contains__(self, data: K) -> bool:
        return data in self.cache

    def __len__(self) -> int:
        return len(self.cache)
