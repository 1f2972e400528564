"""ActionGraphContainer: the composite output of one dump run."""

from collections.abc import Iterator
from typing import Any

from actiongraph.messages import MESSAGE_TYPES, Message, json_name
from actiongraph.sink import SectionSink


def _type_checker(message_type: type[Message]):
    def check(value: Any) -> None:
        if not isinstance(value, message_type):
            raise TypeError(
                f"Section '{message_type.section}' only accepts "
                f"{message_type.__name__}, got {type(value).__name__}"
            )

    return check


class ActionGraphContainer:
    """One append-only section per message type.

    Sections are filled by the interning caches in first-seen order and
    reference each other only by integer id. Section order is fixed, so two
    containers filled by the same sequence of calls encode identically.
    """

    def __init__(self) -> None:
        self._sections: dict[str, SectionSink] = {}
        self._types: dict[str, type[Message]] = {}
        for message_type in MESSAGE_TYPES:
            name = message_type.section
            self._sections[name] = SectionSink(name, _type_checker(message_type))
            self._types[name] = message_type

    @property
    def artifacts(self) -> SectionSink:
        return self._sections["artifacts"]

    @property
    def actions(self) -> SectionSink:
        return self._sections["actions"]

    @property
    def targets(self) -> SectionSink:
        return self._sections["targets"]

    @property
    def dep_set_of_files(self) -> SectionSink:
        return self._sections["dep_set_of_files"]

    @property
    def configuration(self) -> SectionSink:
        return self._sections["configuration"]

    @property
    def aspect_descriptors(self) -> SectionSink:
        return self._sections["aspect_descriptors"]

    @property
    def rule_classes(self) -> SectionSink:
        return self._sections["rule_classes"]

    @property
    def path_fragments(self) -> SectionSink:
        return self._sections["path_fragments"]

    def section(self, name: str) -> SectionSink:
        """Return a section by its name.

        Raises:
            KeyError: If there is no such section.
        """
        if name not in self._sections:
            raise KeyError(
                f"Unknown section '{name}'. Available: {list(self._sections)}"
            )
        return self._sections[name]

    def message_type(self, name: str) -> type[Message]:
        """Return the message type stored in section ``name``."""
        self.section(name)
        return self._types[name]

    def sections(self) -> Iterator[tuple[str, SectionSink]]:
        """Iterate (name, section) pairs in output order."""
        return iter(self._sections.items())

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Encode non-empty sections, keyed by camelCase section name."""
        result: dict[str, list[dict[str, Any]]] = {}
        for name, sink in self._sections.items():
            values = sink.snapshot()
            if values:
                result[json_name(name)] = [value.to_dict() for value in values]
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ActionGraphContainer):
            return NotImplemented
        return all(
            sink.snapshot() == other.section(name).snapshot()
            for name, sink in self._sections.items()
        )

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{name}={sink.count()}" for name, sink in self._sections.items()
        )
        return f"ActionGraphContainer({counts})"
