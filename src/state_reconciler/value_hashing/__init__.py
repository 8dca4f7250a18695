"""Value hashing exports."""

from .canonical_hash import canonical_hash, correlation_hash, render_scalar

__all__ = [
    "canonical_hash",
    "correlation_hash",
    "render_scalar",
]
