"""Per-property comparison of previous and merged state."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from state_reconciler.schema_management.schema_models import ResourceSchema
from state_reconciler.state_merging import values_equal

from .report_models import ChangeStatus, PropertyChange


def diff_states(
    schema: ResourceSchema,
    previous: Mapping[str, Any] | None,
    merged: Mapping[str, Any],
) -> tuple[PropertyChange, ...]:
    """Classify every declared property of ``schema`` in declaration order.

    States produced by ``reconcile_payload`` never drop a key, so REMOVED only
    appears when ``merged`` comes from elsewhere, such as a hand-edited state
    file compared against its predecessor.
    """
    previous_values = previous or {}
    changes: list[PropertyChange] = []
    for schema_property in schema.properties:
        state_name = schema_property.state_name
        before = previous_values.get(state_name)
        after = merged.get(state_name)
        if schema_property.write_only:
            status = ChangeStatus.WRITE_ONLY
        elif before is None and after is not None:
            status = ChangeStatus.ADDED
        elif before is not None and after is None:
            status = ChangeStatus.REMOVED
        elif values_equal(before, after):
            status = ChangeStatus.UNCHANGED
        else:
            status = ChangeStatus.UPDATED
        changes.append(
            PropertyChange(state_name=state_name, status=status, previous=before, merged=after)
        )
    return tuple(changes)
