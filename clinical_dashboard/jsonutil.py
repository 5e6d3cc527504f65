"""Reading JSON documents whose root is an array."""

from __future__ import annotations

import json
from typing import IO, Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid number token {name}")


def parse_json_array_root(reader: IO[Any]) -> list[Any]:
    """Read all of ``reader`` and return the elements of its root JSON array.

    ``NaN`` tokens are read as ``null``. Raises ``ValueError`` on read
    failure, malformed JSON, or a root that is not an array.
    """
    try:
        raw = reader.read()
        if isinstance(raw, (bytes, bytearray)):
            raw = bytes(raw).decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ValueError(f"Error reading JSON: {exc}") from exc

    sanitized = raw.replace("NaN", "null")
    try:
        root = json.loads(sanitized, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ValueError(f"Error deserializing JSON root: {exc}") from exc

    if not isinstance(root, list):
        raise ValueError("JSON root is not an array")
    return root