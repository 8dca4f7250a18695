"""Merge failure types."""

from __future__ import annotations

from typing import Any


class MergeError(Exception):
    """Base class for reconciliation failures; no partial tree accompanies it."""

    def __init__(self, message: str, *, property_name: str | None = None) -> None:
        super().__init__(message)
        self.property_name = property_name


class SchemaMismatchError(MergeError):
    """Declared property type disagrees with the payload's actual shape."""

    def __init__(self, property_name: str, detail: str) -> None:
        super().__init__(f"property '{property_name}' {detail}", property_name=property_name)


class UnsupportedTypeError(MergeError):
    """Property kind outside the closed set of supported kinds."""

    def __init__(self, property_name: str, kind: Any) -> None:
        super().__init__(
            f"property '{property_name}': '{kind}' type not supported",
            property_name=property_name,
        )


class MissingIdentifierError(MergeError):
    """Identifier property absent or null in the payload."""

    def __init__(self, property_name: str) -> None:
        super().__init__(
            "response object returned from the API is missing mandatory identifier "
            f"property '{property_name}'",
            property_name=property_name,
        )


class UnsupportedIdentifierTypeError(MergeError):
    """Identifier value cannot be rendered as a string identifier."""

    def __init__(self, property_name: str, value: Any) -> None:
        super().__init__(
            f"identifier property '{property_name}' has unsupported type "
            f"'{type(value).__name__}'",
            property_name=property_name,
        )
