"""InterningCache: build and publish each distinct key exactly once."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from actiongraph.identity import IdentityTable
from actiongraph.protocol import Sink

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class InternCycleError(RuntimeError):
    """A key was requested again while its own value was being constructed."""


@dataclass
class InternStats:
    """Interning statistics."""

    hits: int = 0  # key already had an id
    misses: int = 0  # key was new
    published: int = 0  # value reached the sink
    failures: int = 0  # construct or publish raised


class InterningCache(Generic[K, V]):
    """Generic interning cache over key type K and serialized value type V.

    For every semantically distinct key, ``construct(key, id)`` runs once to
    build its value and ``publish(value)`` appends that value to the output
    sink. Every later request for an equal key returns the same id without
    touching either function.

    The get-or-construct sequence runs under one re-entrant lock per cache.
    Concurrent first requests for the same key therefore serialize: exactly
    one thread constructs and publishes, the others wait and return its id.
    A construct function may query other caches, and may query this cache
    for *other* keys (nested sets, parent path fragments). Querying this
    cache for the key currently under construction raises InternCycleError.
    Cache-to-cache calls must stay acyclic; a cycle between two caches
    queried from different threads can deadlock and is not detected.

    When construct or publish raises, the key's id is released and nothing
    is recorded, so a retry with the same key counts as first-seen. publish
    must itself be all-or-nothing. Keys of this cache that a failed
    construction interned along the way stay recorded; if one of them took
    a later id, the released id is never reused. Caches whose keys nest
    intern the nested keys before the outer key to keep ids dense.
    """

    def __init__(
        self,
        construct: Callable[[K, int], V],
        publish: Sink | Callable[[V], None],
        *,
        name: str | None = None,
        table: IdentityTable | None = None,
    ) -> None:
        """Initialize InterningCache.

        Args:
            construct: Builds the value for a new key from the key and its
                assigned id.
            publish: The output Sink, or a callable appending a freshly
                built value to it.
            name: Label used in log records and error messages.
            table: IdentityTable to record ids in. Defaults to a new table
                with ids starting at 1.
        """
        self._construct = construct
        self._publish = publish.append if isinstance(publish, Sink) else publish
        self.name = name or "intern"
        self._table = table if table is not None else IdentityTable()
        if len(self._table) != 0:
            raise ValueError("table must be empty")
        self._lock = threading.RLock()
        self._pending: set[int] = set()
        self._stats = InternStats()

    def data_to_id(self, key: K) -> int:
        """Return the id for key, building and publishing its value if new.

        Raises:
            InternCycleError: If key is requested from inside its own
                construction.
            Exception: Whatever construct or publish raised; the key is left
                unrecorded.
        """
        with self._lock:
            assigned, is_new = self._table.get_or_assign(key)
            if not is_new:
                if assigned in self._pending:
                    raise InternCycleError(
                        f"{self.name}: key {key!r} (id {assigned}) was requested "
                        "while its own value was being constructed"
                    )
                self._stats.hits += 1
                return assigned

            self._stats.misses += 1
            self._pending.add(assigned)
            try:
                value = self._construct(key, assigned)
                self._publish(value)
            except BaseException:
                self._table.discard(key)
                self._stats.failures += 1
                logger.debug("%s: rolled back id %d for %r", self.name, assigned, key)
                raise
            finally:
                self._pending.discard(assigned)

            self._stats.published += 1
            logger.debug("%s: interned %r as id %d", self.name, key, assigned)
            return assigned

    def lookup(self, key: K) -> int | None:
        """Return the id of an already interned key, or None.

        Keys still under construction report None.
        """
        with self._lock:
            assigned = self._table.lookup(key)
            if assigned is None or assigned in self._pending:
                return None
            return assigned

    @property
    def stats(self) -> InternStats:
        """A snapshot of the interning statistics."""
        with self._lock:
            return replace(self._stats)

    def reset_stats(self) -> None:
        """Reset interning statistics to zero."""
        with self._lock:
            self._stats = InternStats()

    def __contains__(self, key: K) -> bool:
        return self.lookup(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._table) - len(self._pending)
