"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Configuration, LoggingSettings, ReconciliationSettings, SchemaConfig

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schema = _parse_schema_section(parsed.get("schema"), path.parent)
    reconciliation = _parse_reconciliation_section(parsed.get("reconciliation"))
    logging_settings = _parse_logging_section(parsed.get("logging"))

    return Configuration(
        path=path,
        schema=schema,
        reconciliation=reconciliation,
        logging=logging_settings,
    )


def resolve_log_level(level_name: str) -> int:
    """Return the numeric logging level for a validated level name."""
    return int(getattr(logging, level_name.upper()))


def _parse_schema_section(value: Any, base_path: Path) -> SchemaConfig:
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("schema.inline must be a string.")
        return SchemaConfig(text=inline, source_path=None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("schema.path must be a string.")
        schema_path = _resolve_path(base_path, path_value)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        text = schema_path.read_text(encoding="utf-8")
        if not text.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        return SchemaConfig(text=text, source_path=schema_path)
    raise ConfigurationError("Schema definition requires either inline or path.")


def _parse_reconciliation_section(value: Any) -> ReconciliationSettings:
    section = _optional_mapping(value, "reconciliation")
    resource_name = _require_non_empty_string(
        section.get("resource_name", "resource"), "reconciliation.resource_name"
    )
    ignore_list_order = _require_bool(
        section.get("ignore_list_order", True), "reconciliation.ignore_list_order"
    )
    require_identifier = _require_bool(
        section.get("require_identifier", True), "reconciliation.require_identifier"
    )
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "reconciliation.timeout_seconds"
    )
    return ReconciliationSettings(
        resource_name=resource_name,
        ignore_list_order=ignore_list_order,
        require_identifier=require_identifier,
        timeout_seconds=timeout_seconds,
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", "WARNING"), "logging.level").upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of: {', '.join(_LOG_LEVELS)}.")
    return LoggingSettings(level=level)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
