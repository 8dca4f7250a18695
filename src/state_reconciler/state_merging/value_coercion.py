"""Type-directed coercion of remote values into their local state representation."""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from state_reconciler.schema_management.schema_models import PropertyKind, SchemaProperty

from . import collection_reconciliation, object_merging
from .merge_errors import SchemaMismatchError, UnsupportedTypeError
from .value_tree import ValueShape, classify_value


def coerce_value(schema_property: SchemaProperty, remote_value: Any, local_value: Any) -> Any:
    """Convert ``remote_value`` to the state value of ``schema_property``.

    Write-only properties always keep ``local_value``; remote reads never
    overwrite them.
    """
    if schema_property.write_only:
        return local_value

    kind = schema_property.kind
    if kind == PropertyKind.OBJECT:
        return object_merging.merge_object(schema_property, remote_value, local_value)
    if kind == PropertyKind.LIST:
        if schema_property.is_primitive_collection:
            return _copy_primitive_array(schema_property, remote_value)
        if schema_property.is_object_collection:
            return collection_reconciliation.merge_ordered_object_list(
                schema_property, remote_value, local_value
            )
        raise SchemaMismatchError(schema_property.name, "is supposed to be an array of objects")
    if kind == PropertyKind.SET:
        if schema_property.is_primitive_collection:
            return _copy_primitive_array(schema_property, remote_value)
        if schema_property.is_object_collection:
            return collection_reconciliation.merge_object_set(
                schema_property, remote_value, local_value
            )
        raise SchemaMismatchError(schema_property.name, "is supposed to be a set of objects")

    scalar_coercer = _SCALAR_COERCERS.get(kind)
    if scalar_coercer is None:
        raise UnsupportedTypeError(schema_property.name, kind)
    if classify_value(remote_value) == ValueShape.NULL:
        return None
    return scalar_coercer(schema_property, remote_value)


def _coerce_string(schema_property: SchemaProperty, value: Any) -> str:
    if not isinstance(value, str):
        raise _scalar_mismatch(schema_property, value)
    return value


def _coerce_integer(schema_property: SchemaProperty, value: Any) -> int:
    if isinstance(value, bool):
        raise _scalar_mismatch(schema_property, value)
    if isinstance(value, int):
        return value
    # JSON numbers frequently arrive as floats; keep the integral part.
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    raise _scalar_mismatch(schema_property, value)


def _coerce_float(schema_property: SchemaProperty, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise _scalar_mismatch(schema_property, value)
    return float(value)


def _coerce_boolean(schema_property: SchemaProperty, value: Any) -> bool:
    if not isinstance(value, bool):
        raise _scalar_mismatch(schema_property, value)
    return value


_SCALAR_COERCERS: dict[PropertyKind, Callable[[SchemaProperty, Any], Any]] = {
    PropertyKind.STRING: _coerce_string,
    PropertyKind.INTEGER: _coerce_integer,
    PropertyKind.FLOAT: _coerce_float,
    PropertyKind.BOOLEAN: _coerce_boolean,
}


def _copy_primitive_array(schema_property: SchemaProperty, value: Any) -> list[Any] | None:
    shape = classify_value(value)
    if shape == ValueShape.NULL:
        return None
    if shape != ValueShape.ARRAY:
        raise SchemaMismatchError(
            schema_property.name, f"expects an array but received {shape.value}"
        )
    return list(value)


def _scalar_mismatch(schema_property: SchemaProperty, value: Any) -> SchemaMismatchError:
    return SchemaMismatchError(
        schema_property.name,
        f"expects a {schema_property.kind.value} value but received "
        f"'{type(value).__name__}'",
    )
