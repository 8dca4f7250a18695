"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "reconciler.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reconciliation configuration template for state-reconciler.
# Replace every <REQUIRED> placeholder before running reconcile.
# Replace <OPTIONAL> placeholders only when your setup needs them.

schema:
  # Provide either an inline resource schema declaration or a declaration path.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

reconciliation:
  # Name used in log and timeout messages.
  resource_name: "<OPTIONAL>"
  # Keep the prior order of lists declared with ignore_order: true.
  ignore_list_order: true
  # Fail when the payload does not carry the identifier property.
  require_identifier: true
  timeout_seconds: 30

logging:
  # One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
  level: "WARNING"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
