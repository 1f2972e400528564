"""SectionSink: list-backed append-only output section."""

import threading
from collections.abc import Callable, Iterator
from typing import Any


class SectionSink:
    """Append-only sequence of serialized values for one output section.

    Values are kept in append order. There is no removal or update. An
    optional validator runs before each value is stored; if it raises, the
    section is left unchanged.
    """

    def __init__(
        self,
        name: str,
        validator: Callable[[Any], None] | None = None,
    ) -> None:
        """Initialize SectionSink.

        Args:
            name: Section name in the composite output (e.g. "targets").
            validator: Optional callable raising on values that must not be
                appended.
        """
        if not name:
            raise ValueError("Section name cannot be empty")
        self.name = name
        self._validator = validator
        self._values: list[Any] = []
        self._lock = threading.Lock()

    def append(self, value: Any) -> None:
        """Append a value to the end of the section."""
        if self._validator is not None:
            self._validator(value)
        with self._lock:
            self._values.append(value)

    def count(self) -> int:
        """Return the number of appended values."""
        with self._lock:
            return len(self._values)

    def snapshot(self) -> tuple[Any, ...]:
        """Return the appended values, in order, as a tuple."""
        with self._lock:
            return tuple(self._values)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"SectionSink({self.name!r}, count={self.count()})"
