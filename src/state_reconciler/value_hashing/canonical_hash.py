"""Canonical structural hashing of value trees.

Mappings hash independently of key insertion order (keys are sorted before
concatenation); arrays hash in element order. The concatenated text is reduced
with CRC-32, so hashes are stable across processes and interpreter runs, unlike
the built-in ``hash``.
"""

from __future__ import annotations

import math
import zlib
from collections.abc import Mapping, Sequence
from typing import Any

NULL_TEXT = "null"


def canonical_hash(value: Any) -> int:
    """Return a deterministic, non-negative hash for ``value``."""
    return _string_hash(_canonical_text(value))


def correlation_hash(value: Any, key_fields: Sequence[str]) -> int:
    """Hash the values of ``key_fields`` in the given order; non-mappings hash whole.

    Only the field values take part, so the same logical key hashes equally
    whether it is read under payload names or state names.
    """
    if not isinstance(value, Mapping):
        return canonical_hash(value)
    return canonical_hash([value.get(field) for field in key_fields])


def render_scalar(value: Any) -> str:
    """Render a scalar so that numerically equal wire values render identically."""
    if value is None:
        return NULL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _canonical_text(value: Any) -> str:
    if isinstance(value, Mapping):
        return "".join(f"{key}{canonical_hash(value[key])}" for key in sorted(value, key=str))
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return "".join(str(canonical_hash(item)) for item in value)
    return render_scalar(value)


def _string_hash(text: str) -> int:
    return zlib.crc32(text.encode("utf-8")) & 0xFFFFFFFF
