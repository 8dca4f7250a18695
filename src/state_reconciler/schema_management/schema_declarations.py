"""Resource schema declaration loading service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import yaml

from state_reconciler.configuration.runtime_settings import SchemaConfig

from .schema_models import PropertyKind, ResourceSchema, SchemaError, SchemaProperty

_TYPE_ALIASES: Mapping[str, PropertyKind] = {
    "string": PropertyKind.STRING,
    "str": PropertyKind.STRING,
    "integer": PropertyKind.INTEGER,
    "int": PropertyKind.INTEGER,
    "float": PropertyKind.FLOAT,
    "number": PropertyKind.FLOAT,
    "boolean": PropertyKind.BOOLEAN,
    "bool": PropertyKind.BOOLEAN,
    "object": PropertyKind.OBJECT,
    "list": PropertyKind.LIST,
    "array": PropertyKind.LIST,
    "set": PropertyKind.SET,
}


def load_resource_schema(config: SchemaConfig) -> ResourceSchema:
    """Parse declaration text (YAML or JSON) into a resource schema."""
    try:
        root = yaml.safe_load(config.text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid resource schema declaration: {exc}") from exc
    return parse_resource_schema(root)


def parse_resource_schema(
    node: Any, *, prefix: str = "", inherited_wrap: bool = False
) -> ResourceSchema:
    """Build a resource schema from an already decoded declaration mapping."""
    if not isinstance(node, Mapping):
        raise SchemaError(f"{_label(prefix, 'schema')} must be a mapping.")

    wrap = node.get("wrap_nested_objects", inherited_wrap)
    if not isinstance(wrap, bool):
        raise SchemaError(f"{_label(prefix, 'wrap_nested_objects')} must be a boolean.")

    declarations = node.get("properties")
    if not isinstance(declarations, Sequence) or isinstance(declarations, str | bytes):
        raise SchemaError(f"{_label(prefix, 'properties')} must be a list of properties.")
    if not declarations:
        raise SchemaError(f"{_label(prefix, 'properties')} must declare at least one property.")

    properties = tuple(
        _parse_property(declaration, prefix=prefix, inherited_wrap=wrap)
        for declaration in declarations
    )
    return ResourceSchema(properties=properties, wrap_as_single_element_list=wrap)


def _parse_property(declaration: Any, *, prefix: str, inherited_wrap: bool) -> SchemaProperty:
    if not isinstance(declaration, Mapping) or "name" not in declaration:
        raise SchemaError(f"{_label(prefix, 'properties')} entries must include a name.")
    name = declaration["name"]
    if not isinstance(name, str) or not name.strip():
        raise SchemaError(f"{_label(prefix, 'properties')} names must be non-empty strings.")
    path = name if not prefix else f"{prefix}.{name}"
    kind = _parse_kind(declaration.get("type"), path)

    element_schema: ResourceSchema | None = None
    array_item_kind: PropertyKind | None = None
    if kind == PropertyKind.OBJECT:
        element_schema = parse_resource_schema(
            declaration, prefix=path, inherited_wrap=inherited_wrap
        )
    elif kind in (PropertyKind.LIST, PropertyKind.SET):
        element_schema, array_item_kind = _parse_items(
            declaration.get("items"), path=path, inherited_wrap=inherited_wrap
        )

    correlation_key = _parse_correlation_key(declaration.get("correlation_key"), path)
    if correlation_key and not (kind == PropertyKind.SET and element_schema is not None):
        raise SchemaError(f"{path}.correlation_key is only supported on sets of objects.")

    return SchemaProperty(
        name=name,
        kind=kind,
        write_only=_optional_flag(declaration, "write_only", path),
        ignore_order=_optional_flag(declaration, "ignore_order", path),
        element_schema=element_schema,
        array_item_kind=array_item_kind,
        is_identifier=_optional_flag(declaration, "identifier", path),
        preferred_name=_optional_name(declaration.get("preferred_name"), path),
        correlation_key=correlation_key,
    )


def _parse_kind(value: Any, path: str) -> PropertyKind:
    if not isinstance(value, str):
        raise SchemaError(f"{path}.type must be a string.")
    kind = _TYPE_ALIASES.get(value.strip().lower())
    if kind is None:
        raise SchemaError(f"{path}.type '{value}' is not supported.")
    return kind


def _parse_items(
    items: Any, *, path: str, inherited_wrap: bool
) -> tuple[ResourceSchema | None, PropertyKind | None]:
    if isinstance(items, str):
        item_kind = _parse_kind(items, f"{path}.items")
        if not item_kind.is_primitive:
            raise SchemaError(f"{path}.items must name a primitive type or declare properties.")
        return None, item_kind
    if isinstance(items, Mapping):
        if "properties" in items:
            nested = parse_resource_schema(
                items, prefix=f"{path}.items", inherited_wrap=inherited_wrap
            )
            return nested, None
        if "type" in items:
            return _parse_items(items["type"], path=path, inherited_wrap=inherited_wrap)
    raise SchemaError(f"{path}.items is required for list and set properties.")


def _parse_correlation_key(value: Any, path: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Sequence):
        raise SchemaError(f"{path}.correlation_key must be a string or list of strings.")
    fields: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise SchemaError(f"{path}.correlation_key entries must be non-empty strings.")
        fields.append(item.strip())
    return tuple(fields)


def _optional_flag(declaration: Mapping[str, Any], key: str, path: str) -> bool:
    value = declaration.get(key, False)
    if not isinstance(value, bool):
        raise SchemaError(f"{path}.{key} must be a boolean.")
    return value


def _optional_name(value: Any, path: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaError(f"{path}.preferred_name must be a string.")
    stripped = value.strip()
    return stripped or None


def _label(prefix: str, key: str) -> str:
    return key if not prefix else f"{prefix}.{key}"
