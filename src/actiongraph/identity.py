"""IdentityTable: semantic key -> dense sequential integer id."""

from collections.abc import Callable, Hashable, MutableMapping
from typing import Any

from cachetools import Cache
from cachetools.keys import hashkey


class IdentityTable:
    """Mapping from semantic keys to sequentially assigned integer ids.

    Ids start at ``base`` (1 by default, leaving 0 free to mean "unset") and
    grow by exactly one per newly recorded key. Keys are wrapped with ``key``
    before lookup, the same way ``cachetools.cached`` builds its cache keys,
    so two keys share an id iff they are equal under ``__eq__``/``__hash__``.

    Keys must not be mutated after they are recorded; a key whose hash changes
    afterwards is a caller error and lookups for it are undefined.

    The table is not synchronized. Callers sharing it between threads must
    guard every call (InterningCache does).
    """

    def __init__(
        self,
        mapping: MutableMapping[Hashable, int] | None = None,
        key: Callable[..., Hashable] = hashkey,
        base: int = 1,
    ) -> None:
        """Initialize IdentityTable.

        Args:
            mapping: Backing mapping for key -> id entries. Defaults to a plain
                dict. Must be empty and must never evict entries.
            key: Function turning a key into its hashable lookup form.
            base: The id assigned to the first recorded key.

        Raises:
            ValueError: If mapping evicts entries, is not empty, or base is
                negative.
        """
        if mapping is None:
            mapping = {}
        if isinstance(mapping, Cache):
            raise ValueError(
                f"mapping must not evict entries, got {type(mapping).__name__}; "
                "an evicted key would be assigned a second id"
            )
        if len(mapping) != 0:
            raise ValueError("mapping must be empty")
        if base < 0:
            raise ValueError(f"base must be non-negative, got {base}")

        self._ids: MutableMapping[Hashable, int] = mapping
        self._key = key
        self._base = base
        self._next_id = base

    @property
    def base(self) -> int:
        """The id assigned to the first recorded key."""
        return self._base

    @property
    def next_id(self) -> int:
        """The id the next new key will receive."""
        return self._next_id

    def get_or_assign(self, key: Any) -> tuple[int, bool]:
        """Return the id for key, recording it under a fresh id if absent.

        Args:
            key: The key to look up.

        Returns:
            ``(id, False)`` when key was recorded before, or ``(id, True)``
            with ``id == next_id`` (before the call) for a new key.
        """
        lookup_key = self._key(key)
        existing = self._ids.get(lookup_key)
        if existing is not None:
            return existing, False

        assigned = self._next_id
        self._ids[lookup_key] = assigned
        self._next_id += 1
        return assigned, True

    def lookup(self, key: Any) -> int | None:
        """Return the id recorded for key, or None."""
        return self._ids.get(self._key(key))

    def discard(self, key: Any) -> None:
        """Forget a recorded key.

        If key holds the most recently assigned id, the counter rewinds so
        that id is handed out again. Otherwise the id is left unused.

        Raises:
            KeyError: If key is not recorded.
        """
        lookup_key = self._key(key)
        if lookup_key not in self._ids:
            raise KeyError(f"Key {key!r} is not recorded")
        assigned = self._ids.pop(lookup_key)
        if assigned == self._next_id - 1:
            self._next_id = assigned

    def __contains__(self, key: Any) -> bool:
        return self._key(key) in self._ids

    def __len__(self) -> int:
        return len(self._ids)
