"""Schema management exports."""

from .schema_declarations import load_resource_schema, parse_resource_schema
from .schema_models import (
    PropertyKind,
    ResourceSchema,
    SchemaError,
    SchemaProperty,
    UnknownPropertyError,
    to_snake_case,
)

__all__ = [
    "PropertyKind",
    "ResourceSchema",
    "SchemaError",
    "SchemaProperty",
    "UnknownPropertyError",
    "load_resource_schema",
    "parse_resource_schema",
    "to_snake_case",
]
