"""Main CLI entry point for the FHIR R4 mapper.

This module provides the main Click command group for the fhir-r4-mapper CLI.
"""

from pathlib import Path
from typing import Optional

import click

from fhir_r4_mapper import __version__
from fhir_r4_mapper.cli.csv_commands import csv
from fhir_r4_mapper.cli.patient_commands import patient
from fhir_r4_mapper.cli.serve_commands import serve
from fhir_r4_mapper.config import load_config
from fhir_r4_mapper.logging_audit import configure_logging
from fhir_r4_mapper.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="fhir-r4-mapper")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--redact-pii",
    is_flag=True,
    help="Redact PII (patient names, SSNs) from logs",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    redact_pii: bool,
) -> None:
    """FHIR R4 Mapper - Convert Synthea patient CSV files to FHIR R4 Patient resources.

    Common usage:

        # Convert patients.csv to NDJSON
        fhir-r4-mapper csv convert patients.csv --output patients.ndjson

        # Report malformed rows without converting
        fhir-r4-mapper csv validate patients.csv

        # Inspect a FHIR Patient JSON file
        fhir-r4-mapper patient decode patient.json

        # Run the HTTP service
        fhir-r4-mapper serve --port 8080

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose

    # Precedence: CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file
    redact_pii_setting = redact_pii or config_obj.logging.redact_pii

    configure_logging(
        level=log_level, log_file=log_file_path, redact_pii=redact_pii_setting
    )


cli.add_command(csv)
cli.add_command(patient)
cli.add_command(serve)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate_config(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        fhir-r4-mapper config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")

    click.echo("\nLoader:")
    click.echo(f"  Fail fast:   {config_obj.loader.fail_fast}")
    click.echo(f"  Encoding:    {config_obj.loader.encoding or 'platform default'}")
    click.echo(f"  Date mode:   {config_obj.loader.date_mode.value}")

    click.echo("\nCodec:")
    click.echo(f"  Pretty print: {config_obj.codec.pretty_print}")

    click.echo("\nService:")
    click.echo(f"  Address:     {config_obj.service.host}:{config_obj.service.port}")

    click.echo("\nLogging:")
    click.echo(f"  Level:       {config_obj.logging.level}")
    click.echo(f"  Log file:    {config_obj.logging.log_file}")
    click.echo(f"  Redact PII:  {config_obj.logging.redact_pii}")


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"fhir-r4-mapper version {__version__}")


if __name__ == "__main__":
    cli()
