"""Container serialization: JSON wire format for action graph dumps.

The envelope is ``{"format": "actiongraph", "version": 1, "container": {...}}``.
Sections are keyed by camelCase name (``depSetOfFiles``, ``ruleClasses``...)
and keep their append order; message fields are written with sorted keys, so
the same sequence of cache calls always produces the same bytes.
"""

import hashlib
import json
from typing import Any

from actiongraph.container import ActionGraphContainer
from actiongraph.messages import json_name

SUPPORTED_VERSIONS = {1}
FORMAT_ID = "actiongraph"


def _validate_envelope(obj: Any) -> None:
    """Validate top-level envelope."""
    if not isinstance(obj, dict):
        raise ValueError("Document must be a JSON object")
    fmt = obj.get("format")
    if fmt != FORMAT_ID:
        raise ValueError(f"Document format must be '{FORMAT_ID}', got {fmt!r}")
    version = obj.get("version")
    if version not in SUPPORTED_VERSIONS:
        raise ValueError(
            f"Document version {version} is not supported. Supported: {sorted(SUPPORTED_VERSIONS)}"
        )
    if "container" not in obj:
        raise ValueError("Document must have 'container'")
    if not isinstance(obj["container"], dict):
        raise ValueError("Document 'container' must be an object")


def _decode_container(obj: dict) -> ActionGraphContainer:
    """Decode sections into a fresh container, in document order per section."""
    container = ActionGraphContainer()
    by_json_name = {json_name(name): name for name, _ in container.sections()}

    unknown = sorted(set(obj) - set(by_json_name))
    if unknown:
        raise ValueError(
            f"Container has unknown sections: {unknown}. "
            f"Known: {sorted(by_json_name)}"
        )

    for key, name in by_json_name.items():
        entries = obj.get(key, [])
        if not isinstance(entries, list):
            raise ValueError(f"Section '{key}' must be an array")
        message_type = container.message_type(name)
        sink = container.section(name)
        for i, entry in enumerate(entries):
            try:
                sink.append(message_type.from_dict(entry))
            except ValueError as e:
                raise ValueError(f"Section '{key}' entry {i}: {e}") from e
    return container


def dump_container_to_dict(container: ActionGraphContainer) -> dict:
    """Serialize container to envelope dict."""
    return {
        "format": FORMAT_ID,
        "version": 1,
        "container": container.to_dict(),
    }


def dump_container(container: ActionGraphContainer, indent: int | None = None) -> str:
    """Serialize container to JSON string. Deterministic output."""
    return json.dumps(dump_container_to_dict(container), sort_keys=True, indent=indent)


def load_container_from_dict(obj: dict) -> ActionGraphContainer:
    """Load container from envelope dict."""
    _validate_envelope(obj)
    return _decode_container(obj["container"])


def load_container(data: str | bytes) -> ActionGraphContainer:
    """Deserialize JSON string or bytes to a container."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    obj = json.loads(data)
    return load_container_from_dict(obj)


def container_digest(container: ActionGraphContainer) -> str:
    """SHA-256 of the canonical JSON dump. Equal dumps have equal digests."""
    return hashlib.sha256(dump_container(container).encode("utf-8")).hexdigest()
