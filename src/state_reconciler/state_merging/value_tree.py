"""Value tree shape classification."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any


class ValueShape(str, Enum):
    """Structural variants an untyped value tree node may take."""

    NULL = "null"
    SCALAR = "scalar"
    OBJECT = "object"
    ARRAY = "array"


def classify_value(value: Any) -> ValueShape:
    """Return the structural shape of one value tree node."""
    if value is None:
        return ValueShape.NULL
    if isinstance(value, Mapping):
        return ValueShape.OBJECT
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return ValueShape.ARRAY
    return ValueShape.SCALAR


def values_equal(left: Any, right: Any) -> bool:
    """Deep structural equality; booleans never equal numbers, ``1 == 1.0``."""
    left_shape = classify_value(left)
    if left_shape != classify_value(right):
        return False
    if left_shape == ValueShape.NULL:
        return True
    if left_shape == ValueShape.OBJECT:
        if set(left) != set(right):
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if left_shape == ValueShape.ARRAY:
        if len(left) != len(right):
            return False
        return all(values_equal(item, other) for item, other in zip(left, right, strict=True))
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    return bool(left == right)
