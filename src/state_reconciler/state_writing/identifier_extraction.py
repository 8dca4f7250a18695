"""Resource identifier extraction service."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from state_reconciler.schema_management.schema_models import ResourceSchema
from state_reconciler.state_merging.merge_errors import (
    MissingIdentifierError,
    UnsupportedIdentifierTypeError,
)


def extract_identifier(schema: ResourceSchema, payload: Mapping[str, Any]) -> str:
    """Return the canonical string identifier held by ``payload``.

    Integers render as base-10 digits; floats are truncated to their integral
    part first, since identifiers are integral even when the wire encodes them
    as floating point.
    """
    identifier_property = schema.identifier_property()
    value = payload.get(identifier_property.name)
    if value is None:
        raise MissingIdentifierError(identifier_property.name)

    if isinstance(value, bool):
        raise UnsupportedIdentifierTypeError(identifier_property.name, value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedIdentifierTypeError(identifier_property.name, value)
        return str(int(value))
    if isinstance(value, str):
        return value
    raise UnsupportedIdentifierTypeError(identifier_property.name, value)
