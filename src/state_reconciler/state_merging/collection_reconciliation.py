"""Element correspondence for list and set properties holding objects."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from state_reconciler.schema_management.schema_models import SchemaProperty
from state_reconciler.value_hashing import canonical_hash, correlation_hash

from . import object_merging
from .merge_errors import SchemaMismatchError
from .value_tree import ValueShape, classify_value

_LOGGER = logging.getLogger(__name__)


def merge_ordered_object_list(
    schema_property: SchemaProperty, remote_array: Any, local_array: Any
) -> list[Any]:
    """Merge list elements by position; index ``i`` remote meets index ``i`` local."""
    remote_items = _remote_items(schema_property, remote_array)
    local_items = _local_items(local_array)

    merged: list[Any] = []
    for index in range(max(len(remote_items), len(local_items))):
        remote_item = remote_items[index] if index < len(remote_items) else None
        local_item = local_items[index] if index < len(local_items) else None
        merged.append(object_merging.merge_object(schema_property, remote_item, local_item))
    return merged


def merge_object_set(
    schema_property: SchemaProperty, remote_array: Any, local_array: Any
) -> list[Any]:
    """Merge set elements by content hash.

    Each remote element is merged against the first local element with an
    equal hash, or against no prior state when none exists. Local elements
    without a remote counterpart are dropped. Output keeps remote order and
    never holds two elements with the same canonical hash.
    """
    remote_items = _remote_items(schema_property, remote_array)
    local_items = _local_items(local_array)
    remote_hash, local_hash = _element_hashers(schema_property)

    local_by_hash: dict[int, Any] = {}
    for local_item in local_items:
        local_by_hash.setdefault(local_hash(local_item), local_item)

    merged: list[Any] = []
    merged_hashes: set[int] = set()
    for remote_item in remote_items:
        prior_item = local_by_hash.get(remote_hash(remote_item))
        merged_item = object_merging.merge_object(schema_property, remote_item, prior_item)
        merged_hash = canonical_hash(merged_item)
        if merged_hash in merged_hashes:
            _LOGGER.debug(
                "Set property '%s' already holds an element with hash %d; skipping duplicate.",
                schema_property.name,
                merged_hash,
            )
            continue
        merged_hashes.add(merged_hash)
        merged.append(merged_item)
    return merged


def _element_hashers(
    schema_property: SchemaProperty,
) -> tuple[Callable[[Any], int], Callable[[Any], int]]:
    """Return (remote, local) element hash functions."""
    key_fields = schema_property.correlation_key
    if not key_fields:
        return canonical_hash, canonical_hash
    state_fields = tuple(_state_field_name(schema_property, field) for field in key_fields)
    return (
        lambda item: correlation_hash(item, key_fields),
        lambda item: correlation_hash(item, state_fields),
    )


def _state_field_name(schema_property: SchemaProperty, field: str) -> str:
    element_schema = schema_property.element_schema
    if element_schema is None or field not in element_schema.property_names:
        return field
    return element_schema.get_property(field).state_name


def _remote_items(schema_property: SchemaProperty, value: Any) -> Sequence[Any]:
    shape = classify_value(value)
    if shape == ValueShape.NULL:
        return ()
    if shape != ValueShape.ARRAY:
        raise SchemaMismatchError(
            schema_property.name, f"expects an array but received {shape.value}"
        )
    return value


def _local_items(value: Any) -> Sequence[Any]:
    if classify_value(value) == ValueShape.ARRAY:
        return value
    return ()
