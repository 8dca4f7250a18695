"""State writing domain exports."""

from .identifier_extraction import extract_identifier
from .resource_state import ResourceState
from .state_files import StateFileError, load_state_file, write_state_file
from .state_update import (
    RESERVED_STATE_NAMES,
    reconcile_payload,
    set_state_identifier,
    update_data_source_state_with_payload,
    update_state_with_payload,
)

__all__ = [
    "RESERVED_STATE_NAMES",
    "ResourceState",
    "StateFileError",
    "extract_identifier",
    "load_state_file",
    "reconcile_payload",
    "set_state_identifier",
    "update_data_source_state_with_payload",
    "update_state_with_payload",
    "write_state_file",
]
