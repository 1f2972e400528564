"""Recursive hashing utilities for configurations and dump output."""

import hashlib
from collections.abc import Mapping, Sequence
from typing import Any


def _digest(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def hash_value(value: Any) -> str:
    """Deterministic SHA-256 of a JSON-like value.

    Scalars are tagged with their type, so ``None``, ``"None"``, ``5`` and
    ``"5"`` all hash differently. Mapping keys are sorted; list and tuple
    elements keep their order and hash alike.

    Raises:
        TypeError: For anything but None, str, bytes, int, bool and
            mappings or sequences of those.
    """
    if value is None:
        return _digest(b"none:")

    if isinstance(value, str):
        return _digest(b"str:" + value.encode("utf-8"))

    if isinstance(value, bytes):
        return _digest(b"bytes:" + value)

    if isinstance(value, bool):
        return _digest(b"bool:" + str(value).encode("utf-8"))

    if isinstance(value, int):
        return _digest(b"int:" + str(value).encode("utf-8"))

    if isinstance(value, Mapping):
        hasher = hashlib.sha256(b"map")
        for key, val in sorted(value.items(), key=lambda x: x[0]):
            hasher.update(hash_value(key).encode("utf-8"))
            hasher.update(hash_value(val).encode("utf-8"))
        return hasher.hexdigest()

    if isinstance(value, Sequence):
        hasher = hashlib.sha256(b"seq")
        for item in value:
            hasher.update(hash_value(item).encode("utf-8"))
        return hasher.hexdigest()

    raise TypeError(
        f"Unsupported type for hashing: {type(value).__name__}. "
        f"Value must be dict, list, tuple, str, bytes, int, bool, or None."
    )
