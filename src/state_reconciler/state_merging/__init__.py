"""State merging domain exports."""

from .collection_reconciliation import merge_object_set, merge_ordered_object_list
from .merge_errors import (
    MergeError,
    MissingIdentifierError,
    SchemaMismatchError,
    UnsupportedIdentifierTypeError,
    UnsupportedTypeError,
)
from .object_merging import merge_object, unwrap_local_object
from .order_preservation import items_equal, reorder_preserving_prior_order
from .value_coercion import coerce_value
from .value_tree import ValueShape, classify_value, values_equal

__all__ = [
    "MergeError",
    "MissingIdentifierError",
    "SchemaMismatchError",
    "UnsupportedIdentifierTypeError",
    "UnsupportedTypeError",
    "ValueShape",
    "classify_value",
    "coerce_value",
    "items_equal",
    "merge_object",
    "merge_object_set",
    "merge_ordered_object_list",
    "reorder_preserving_prior_order",
    "unwrap_local_object",
    "values_equal",
]
