"""Schema management entities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class SchemaError(Exception):
    """Raised for schema declaration or lookup failures."""


class UnknownPropertyError(SchemaError):
    """Raised when a property name is not declared in a schema."""

    def __init__(self, property_name: str) -> None:
        super().__init__(f"Property '{property_name}' is not declared in the resource schema.")
        self.property_name = property_name


class PropertyKind(str, Enum):
    """Closed set of property types a schema may declare."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    OBJECT = "object"
    LIST = "list"
    SET = "set"

    @property
    def is_primitive(self) -> bool:
        """Return True for scalar kinds."""
        return self in _PRIMITIVE_KINDS


_PRIMITIVE_KINDS = frozenset(
    {PropertyKind.STRING, PropertyKind.INTEGER, PropertyKind.FLOAT, PropertyKind.BOOLEAN}
)


@dataclass(frozen=True)
class SchemaProperty:  # pylint: disable=too-many-instance-attributes
    """One named node of a resource schema."""

    name: str
    kind: PropertyKind
    write_only: bool = False
    ignore_order: bool = False
    element_schema: ResourceSchema | None = None
    array_item_kind: PropertyKind | None = None
    is_identifier: bool = False
    preferred_name: str | None = None
    correlation_key: tuple[str, ...] = ()

    @property
    def state_name(self) -> str:
        """Name under which the property is stored in local and merged trees."""
        if self.preferred_name:
            return self.preferred_name
        return to_snake_case(self.name)

    @property
    def is_collection(self) -> bool:
        return self.kind in (PropertyKind.LIST, PropertyKind.SET)

    @property
    def is_primitive_collection(self) -> bool:
        """Return True for lists/sets whose items are confirmed primitives."""
        return (
            self.is_collection
            and self.element_schema is None
            and self.array_item_kind is not None
            and self.array_item_kind.is_primitive
        )

    @property
    def is_object_collection(self) -> bool:
        """Return True for lists/sets whose items are confirmed objects."""
        return self.is_collection and self.element_schema is not None

    @property
    def should_ignore_order(self) -> bool:
        return self.kind == PropertyKind.LIST and self.ignore_order

    @property
    def wraps_as_single_element_list(self) -> bool:
        """Return True when the merged object must be encoded as ``[object]``."""
        return (
            self.kind == PropertyKind.OBJECT
            and self.element_schema is not None
            and self.element_schema.wrap_as_single_element_list
        )


@dataclass(frozen=True)
class ResourceSchema:
    """Ordered, immutable collection of schema properties."""

    properties: tuple[SchemaProperty, ...]
    wrap_as_single_element_list: bool = False

    def __post_init__(self) -> None:
        seen_names: set[str] = set()
        for schema_property in self.properties:
            if schema_property.name in seen_names:
                raise SchemaError(f"Duplicate schema property detected: {schema_property.name}")
            seen_names.add(schema_property.name)

    def get_property(self, name: str) -> SchemaProperty:
        """Return the property declared under the remote payload name."""
        for schema_property in self.properties:
            if schema_property.name == name:
                return schema_property
        raise UnknownPropertyError(name)

    def identifier_property(self) -> SchemaProperty:
        """Return the property designated as the resource identifier.

        An explicit ``is_identifier`` flag wins; otherwise a property named ``id``
        is used.
        """
        flagged = [item for item in self.properties if item.is_identifier]
        if len(flagged) > 1:
            names = ", ".join(item.name for item in flagged)
            raise SchemaError(f"Only one identifier property may be declared, found: {names}")
        if flagged:
            return flagged[0]
        for schema_property in self.properties:
            if schema_property.name == "id":
                return schema_property
        raise SchemaError("Resource schema does not declare an identifier property.")

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.properties)


def to_snake_case(name: str) -> str:
    """Convert a camelCase payload name into its snake_case state name."""
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()
