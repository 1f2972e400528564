"""Sink Protocol definition."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Protocol for the append-only destination of serialized values.

    Interning caches publish every newly built value into a sink exactly
    once. Iteration order of the final output equals append order.
    """

    def append(self, value: Any) -> None:
        """Append a value.

        Must be all-or-nothing: if append raises, the sink is unchanged.
        """
        ...

    def count(self) -> int:
        """Return the number of values appended so far."""
        ...
