"""Serialized action graph messages.

Each message is an immutable record whose ``id`` is assigned by the interning
cache that built it. References to other messages are plain integer ids into
the section that holds them. Optional references are ``None`` when unset;
they are never encoded as a sentinel id.

JSON form uses camelCase field names and omits fields holding their default
value, so an unset optional reference is absent from the output.
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields
from typing import Any, ClassVar

# Field kinds understood by to_dict()/from_dict()
_INT = "int"
_OPT_INT = "int?"
_STR = "str"
_BOOL = "bool"
_INTS = "int[]"
_STRS = "str[]"
_PAIRS = "pair[]"


def _kind(kind: str, **kwargs: Any) -> Any:
    return field(metadata={"kind": kind}, **kwargs)


def json_name(name: str) -> str:
    """Convert a snake_case field name to its camelCase JSON name."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class KeyValuePair:
    """A string key/value pair (environment variables, aspect parameters)."""

    key: str
    value: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, obj: Any) -> KeyValuePair:
        if not isinstance(obj, dict):
            raise ValueError("KeyValuePair must be an object")
        key = obj.get("key")
        value = obj.get("value", "")
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValueError("KeyValuePair must have string 'key' and 'value'")
        return cls(key=key, value=value)


class Message:
    """Shared dict encoding for the action graph messages."""

    section: ClassVar[str]

    def to_dict(self) -> dict[str, Any]:
        """Encode to a JSON-ready dict, omitting fields at their default."""
        result: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if f.default is not MISSING and value == f.default:
                continue
            if f.metadata["kind"] == _PAIRS:
                value = [pair.to_dict() for pair in value]
            elif isinstance(value, tuple):
                value = list(value)
            result[json_name(f.name)] = value
        return result

    @classmethod
    def from_dict(cls, obj: Any) -> Any:
        """Decode from a dict produced by to_dict(). Validates before construction."""
        if not isinstance(obj, dict):
            raise ValueError(f"{cls.__name__} must be an object")
        known = {json_name(f.name) for f in fields(cls)}  # type: ignore[arg-type]
        unknown = sorted(set(obj) - known)
        if unknown:
            raise ValueError(f"{cls.__name__} has unknown fields: {unknown}")

        kwargs: dict[str, Any] = {}
        for f in fields(cls):  # type: ignore[arg-type]
            name = json_name(f.name)
            if name not in obj:
                if f.default is MISSING:
                    raise ValueError(f"{cls.__name__} must have '{name}'")
                continue
            kwargs[f.name] = _decode_field(
                cls.__name__, name, f.metadata["kind"], obj[name]
            )
        return cls(**kwargs)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_field(owner: str, name: str, kind: str, value: Any) -> Any:
    """Check a decoded JSON value against its field kind and convert it."""
    where = f"{owner} '{name}'"
    if kind in (_INT, _OPT_INT):
        if not _is_int(value):
            raise ValueError(f"{where} must be an integer, got {type(value).__name__}")
        return value
    if kind == _STR:
        if not isinstance(value, str):
            raise ValueError(f"{where} must be a string, got {type(value).__name__}")
        return value
    if kind == _BOOL:
        if not isinstance(value, bool):
            raise ValueError(f"{where} must be a boolean, got {type(value).__name__}")
        return value
    if not isinstance(value, list):
        raise ValueError(f"{where} must be an array")
    if kind == _INTS:
        for i, item in enumerate(value):
            if not _is_int(item):
                raise ValueError(f"{where}[{i}] must be an integer")
        return tuple(value)
    if kind == _STRS:
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise ValueError(f"{where}[{i}] must be a string")
        return tuple(value)
    if kind == _PAIRS:
        return tuple(KeyValuePair.from_dict(item) for item in value)
    raise ValueError(f"{where} has unsupported kind {kind!r}")


@dataclass(frozen=True)
class Target(Message):
    """A rule configured target owning actions."""

    section: ClassVar[str] = "targets"

    id: int = _kind(_INT)
    label: str = _kind(_STR)
    rule_class_id: int | None = _kind(_OPT_INT, default=None)


@dataclass(frozen=True)
class RuleClass(Message):
    """A rule class name such as ``java_library``."""

    section: ClassVar[str] = "rule_classes"

    id: int = _kind(_INT)
    name: str = _kind(_STR)


@dataclass(frozen=True)
class PathFragment(Message):
    """One segment of an exec path; the full path is rebuilt via parent_id."""

    section: ClassVar[str] = "path_fragments"

    id: int = _kind(_INT)
    label: str = _kind(_STR)
    parent_id: int | None = _kind(_OPT_INT, default=None)


@dataclass(frozen=True)
class Artifact(Message):
    section: ClassVar[str] = "artifacts"

    id: int = _kind(_INT)
    path_fragment_id: int = _kind(_INT)
    is_tree_artifact: bool = _kind(_BOOL, default=False)


@dataclass(frozen=True)
class DepSetOfFiles(Message):
    """A nested set of artifacts: direct members plus transitive sets."""

    section: ClassVar[str] = "dep_set_of_files"

    id: int = _kind(_INT)
    direct_artifact_ids: tuple[int, ...] = _kind(_INTS, default=())
    transitive_dep_set_ids: tuple[int, ...] = _kind(_INTS, default=())


@dataclass(frozen=True)
class Configuration(Message):
    section: ClassVar[str] = "configuration"

    id: int = _kind(_INT)
    mnemonic: str = _kind(_STR)
    platform_name: str = _kind(_STR)
    checksum: str = _kind(_STR)
    is_tool: bool = _kind(_BOOL, default=False)


@dataclass(frozen=True)
class AspectDescriptor(Message):
    section: ClassVar[str] = "aspect_descriptors"

    id: int = _kind(_INT)
    name: str = _kind(_STR)
    parameters: tuple[KeyValuePair, ...] = _kind(_PAIRS, default=())


@dataclass(frozen=True)
class Action(Message):
    """A single action, referencing its owner, inputs and outputs by id."""

    section: ClassVar[str] = "actions"

    id: int = _kind(_INT)
    target_id: int = _kind(_INT)
    action_key: str = _kind(_STR)
    mnemonic: str = _kind(_STR)
    configuration_id: int | None = _kind(_OPT_INT, default=None)
    aspect_descriptor_ids: tuple[int, ...] = _kind(_INTS, default=())
    arguments: tuple[str, ...] = _kind(_STRS, default=())
    environment_variables: tuple[KeyValuePair, ...] = _kind(_PAIRS, default=())
    input_dep_set_ids: tuple[int, ...] = _kind(_INTS, default=())
    output_ids: tuple[int, ...] = _kind(_INTS, default=())
    primary_output_id: int | None = _kind(_OPT_INT, default=None)
    execution_platform: str = _kind(_STR, default="")
    discards_outputs: bool = _kind(_BOOL, default=False)


MESSAGE_TYPES: tuple[type[Message], ...] = (
    Artifact,
    Action,
    Target,
    DepSetOfFiles,
    Configuration,
    AspectDescriptor,
    RuleClass,
    PathFragment,
)
