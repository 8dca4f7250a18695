"""Order-preserving reorder policy for lists flagged ``ignore_order``.

The remote system may return logically unordered list items in any order.
Items that still deep-equal an item of the prior order keep the prior position;
items without a counterpart (new or changed) follow in remote order. Supported
situations:

- same items, same order
- same items, different order
- different order plus new items
- fewer items, remaining ones unchanged
- same length but some items changed; changed items move to the end
"""

from __future__ import annotations

from typing import Any

from state_reconciler.schema_management.schema_models import PropertyKind, SchemaProperty

from .merge_errors import SchemaMismatchError
from .object_merging import unwrap_local_object
from .value_tree import ValueShape, classify_value, values_equal


def reorder_preserving_prior_order(
    schema_property: SchemaProperty, prior_value: Any, remote_value: Any
) -> Any:
    """Return ``remote_value`` rearranged to follow ``prior_value`` where possible."""
    if prior_value is None:
        return remote_value
    if remote_value is None:
        return prior_value
    if not schema_property.should_ignore_order:
        return remote_value

    prior_items = _require_array(schema_property, prior_value)
    remote_items = _require_array(schema_property, remote_value)

    reordered: list[Any] = []
    for prior_item in prior_items:
        for remote_item in remote_items:
            if items_equal(schema_property, prior_item, remote_item):
                reordered.append(remote_item)
                break

    for remote_item in remote_items:
        if not _has_counterpart(schema_property, prior_items, remote_item):
            reordered.append(remote_item)
    return reordered


def items_equal(schema_property: SchemaProperty, prior_item: Any, remote_item: Any) -> bool:
    """Compare a prior (state-named) item with a remote (payload-named) item.

    Write-only children are ignored; the remote side never carries them.
    """
    element_schema = schema_property.element_schema
    if element_schema is None:
        return values_equal(prior_item, remote_item)
    if prior_item is None or remote_item is None:
        return prior_item is None and remote_item is None

    prior_mapping = unwrap_local_object(prior_item)
    remote_mapping = unwrap_local_object(remote_item)
    for child in element_schema.properties:
        if child.write_only:
            continue
        prior_child = prior_mapping.get(child.state_name)
        remote_child = remote_mapping.get(child.name)
        if not _child_values_equal(child, prior_child, remote_child):
            return False
    return True


def _has_counterpart(
    schema_property: SchemaProperty, prior_items: list[Any], remote_item: Any
) -> bool:
    return any(items_equal(schema_property, prior_item, remote_item) for prior_item in prior_items)


def _child_values_equal(child: SchemaProperty, prior_value: Any, remote_value: Any) -> bool:
    if child.element_schema is None:
        return values_equal(prior_value, remote_value)
    if child.kind == PropertyKind.OBJECT:
        return items_equal(child, prior_value, remote_value)
    prior_items = prior_value if classify_value(prior_value) == ValueShape.ARRAY else None
    remote_items = remote_value if classify_value(remote_value) == ValueShape.ARRAY else None
    if prior_items is None or remote_items is None:
        return values_equal(prior_value, remote_value)
    if len(prior_items) != len(remote_items):
        return False
    return all(
        items_equal(child, prior_item, remote_item)
        for prior_item, remote_item in zip(prior_items, remote_items, strict=True)
    )


def _require_array(schema_property: SchemaProperty, value: Any) -> list[Any]:
    shape = classify_value(value)
    if shape != ValueShape.ARRAY:
        raise SchemaMismatchError(
            schema_property.name, f"expects an array but received {shape.value}"
        )
    return list(value)
