"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from state_reconciler.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    resolve_log_level,
    write_placeholder_configuration,
)
from state_reconciler.run_execution import (
    RunExecutionError,
    RunRequest,
    execute_reconciliation_run,
)
from state_reconciler.value_hashing import canonical_hash

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="state-reconciler")
@click.option(
    "--log-level",
    "log_level",
    required=False,
    type=click.Choice(_LOG_LEVEL_CHOICES, case_sensitive=False),
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Schema-driven remote/local state reconciliation utility."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.upper() if log_level else None


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="reconcile")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON reconciliation configuration file",
)
@click.option(
    "--remote",
    "remote_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON payload returned by the remote API",
)
@click.option(
    "--state",
    "state_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the stored state file (may not exist yet)",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Where to write the merged state; defaults to --state",
)
@click.option(
    "--report",
    "report_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path for a change report workbook",
)
@click.option(
    "--data-source",
    is_flag=True,
    default=False,
    help="Keep list order exactly as returned by the remote API.",
)
@click.pass_context
def reconcile(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    config_path: str,
    remote_path: str,
    state_path: str,
    output_path: str | None,
    report_path: str | None,
    data_source: bool,
) -> None:
    """Merge a remote payload into the stored state."""
    _configure_logging(ctx.obj.get("log_level") if ctx.obj else None, config_path)
    try:
        outcome = execute_reconciliation_run(
            RunRequest(
                config_path=config_path,
                remote_path=remote_path,
                state_path=state_path,
                output_path=output_path,
                report_path=report_path,
                data_source=data_source,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))


@cli.command(name="hash")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON document",
)
def hash_document(input_path: str) -> None:
    """Print the canonical structural hash of a JSON document."""
    try:
        document = json.loads(Path(input_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(canonical_hash(document)))


def _configure_logging(cli_level: str | None, config_path: str) -> None:
    level_name = cli_level
    if level_name is None:
        try:
            level_name = load_configuration(config_path).logging.level
        except ConfigurationError as exc:
            raise CliError(str(exc)) from exc
    logging.basicConfig(level=resolve_log_level(level_name), format=_LOG_FORMAT)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
