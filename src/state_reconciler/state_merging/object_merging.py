"""Recursive merge of object-typed payload values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from state_reconciler.schema_management.schema_models import SchemaProperty

from . import value_coercion
from .merge_errors import SchemaMismatchError
from .value_tree import ValueShape, classify_value


def merge_object(
    schema_property: SchemaProperty, remote_value: Any, local_value: Any
) -> dict[str, Any] | list[dict[str, Any]]:
    """Merge one object payload against its prior local value, field by field.

    Remote fields are read by their declared payload names and written under
    their state names. The result is encoded as ``[object]`` when the nested
    schema asks for the single-element list encoding.
    """
    element_schema = schema_property.element_schema
    if element_schema is None:
        raise SchemaMismatchError(schema_property.name, "does not declare a nested schema")

    remote_mapping = _remote_mapping(schema_property, remote_value)
    local_mapping = unwrap_local_object(local_value)

    merged: dict[str, Any] = {}
    for child in element_schema.properties:
        merged[child.state_name] = value_coercion.coerce_value(
            child,
            remote_mapping.get(child.name),
            local_mapping.get(child.state_name),
        )

    if schema_property.wraps_as_single_element_list:
        return [merged]
    return merged


def unwrap_local_object(value: Any) -> Mapping[str, Any]:
    """Return the mapping behind a local object value, unwrapping ``[object]``."""
    unwrapped = _unwrap_single_element(value)
    if isinstance(unwrapped, Mapping):
        return unwrapped
    return {}


def _remote_mapping(schema_property: SchemaProperty, value: Any) -> Mapping[str, Any]:
    unwrapped = _unwrap_single_element(value)
    shape = classify_value(unwrapped)
    if shape == ValueShape.NULL:
        return {}
    if shape != ValueShape.OBJECT:
        raise SchemaMismatchError(
            schema_property.name, f"expects an object but received {shape.value}"
        )
    return unwrapped


def _unwrap_single_element(value: Any) -> Any:
    if classify_value(value) == ValueShape.ARRAY and len(value) == 1:
        if classify_value(value[0]) == ValueShape.OBJECT:
            return value[0]
    return value
