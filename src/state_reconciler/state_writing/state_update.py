"""Apply remote payloads to persisted local state."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from state_reconciler.schema_management.schema_models import ResourceSchema, UnknownPropertyError
from state_reconciler.state_merging import (
    SchemaMismatchError,
    coerce_value,
    reorder_preserving_prior_order,
)

from .identifier_extraction import extract_identifier
from .resource_state import ResourceState

_LOGGER = logging.getLogger(__name__)

# Reserved by the host state for the resource identifier.
RESERVED_STATE_NAMES = frozenset({"id"})


def reconcile_payload(
    schema: ResourceSchema,
    remote_payload: Mapping[str, Any],
    local_values: Mapping[str, Any] | None,
    *,
    ignore_list_order: bool = True,
) -> dict[str, Any]:
    """Return the merged state tree for one remote payload.

    Neither input is modified. Properties the schema does not declare are
    logged and skipped; a property whose merged value is None keeps its prior
    local value.
    """
    if not isinstance(remote_payload, Mapping):
        raise SchemaMismatchError("<root>", "payload must be an object")

    merged: dict[str, Any] = copy.deepcopy(dict(local_values or {}))
    for property_name, remote_value in remote_payload.items():
        try:
            schema_property = schema.get_property(property_name)
        except UnknownPropertyError as exc:
            _LOGGER.warning(
                "The API returned a property that is not declared in the resource schema: %s",
                exc,
            )
            continue
        state_name = schema_property.state_name
        if state_name in RESERVED_STATE_NAMES:
            continue

        local_value = merged.get(state_name)
        if ignore_list_order and schema_property.should_ignore_order:
            if remote_value is None:
                # The prior list is in state names and cannot be merged as a payload.
                continue
            remote_value = reorder_preserving_prior_order(
                schema_property, local_value, remote_value
            )

        value = coerce_value(schema_property, remote_value, local_value)
        if value is not None:
            merged[state_name] = value
    return merged


def update_state_with_payload(
    schema: ResourceSchema, remote_payload: Mapping[str, Any], state: ResourceState
) -> None:
    """Save a resource read into ``state``, keeping prior order for ignore-order lists."""
    state.values = reconcile_payload(schema, remote_payload, state.values, ignore_list_order=True)


def update_data_source_state_with_payload(
    schema: ResourceSchema, remote_payload: Mapping[str, Any], state: ResourceState
) -> None:
    """Save a data source read into ``state``, keeping list order as received."""
    state.values = reconcile_payload(schema, remote_payload, state.values, ignore_list_order=False)


def set_state_identifier(
    schema: ResourceSchema, state: ResourceState, remote_payload: Mapping[str, Any]
) -> str:
    """Assign the identifier held by ``remote_payload`` to ``state`` and return it."""
    resource_id = extract_identifier(schema, remote_payload)
    state.set_id(resource_id)
    _LOGGER.debug("Resource identifier set to '%s'.", resource_id)
    return resource_id
