"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SchemaConfig:
    """Normalized resource schema declaration settings."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class ReconciliationSettings:
    """Behaviour of one reconciliation run."""

    resource_name: str
    ignore_list_order: bool
    require_identifier: bool
    timeout_seconds: int


@dataclass(frozen=True)
class LoggingSettings:
    """Log output configuration."""

    level: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaConfig
    reconciliation: ReconciliationSettings
    logging: LoggingSettings
