"""CSV-related CLI commands for the FHIR R4 mapper.

This module provides CLI commands to convert Synthea patients.csv files to FHIR
Patient resources and to report malformed rows.
"""

import json as json_lib
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from fhir_r4_mapper.cli.context import get_config
from fhir_r4_mapper.codec.json_codec import JsonPatientCodec
from fhir_r4_mapper.csv_parser.export import export_malformed_rows
from fhir_r4_mapper.csv_parser.parser import load_patients
from fhir_r4_mapper.mapper.dates import DateParsingMode
from fhir_r4_mapper.utils.exceptions import EncodeError, MalformedRowError

logger = logging.getLogger(__name__)


def _date_mode(legacy_dates: bool, default: DateParsingMode) -> DateParsingMode:
    if legacy_dates:
        return DateParsingMode.LEGACY_MINUTES
    return default


@click.group()
def csv() -> None:
    """Synthea patients.csv conversion and validation commands."""
    pass


@csv.command("convert")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["ndjson", "json"]),
    default="ndjson",
    show_default=True,
    help="ndjson writes one resource per line; json writes an array",
)
@click.option("--fail-fast", is_flag=True, help="Stop at the first malformed row")
@click.option(
    "--legacy-dates",
    is_flag=True,
    help="Parse birth dates with the legacy yyyy-mm-dd (minutes) pattern",
)
@click.option(
    "--export-errors",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Export malformed rows to CSV file",
)
@click.option("--pretty", is_flag=True, help="Indent JSON output (json format only)")
@click.pass_context
def convert_csv_command(
    ctx: click.Context,
    file: Path,
    output: Optional[Path],
    output_format: str,
    fail_fast: bool,
    legacy_dates: bool,
    export_errors: Optional[Path],
    pretty: bool,
) -> None:
    """Convert a Synthea patients.csv file to FHIR R4 Patient JSON.

    Malformed rows are skipped and reported unless --fail-fast is given.
    Exits with code 1 if the file could not be read completely or a
    fail-fast run hits a malformed row.

    Examples:

        # Convert to NDJSON on stdout
        fhir-r4-mapper csv convert patients.csv

        # Convert to a pretty-printed JSON array file
        fhir-r4-mapper csv convert patients.csv --format json --pretty --output patients.json

        # Convert and export rejected rows
        fhir-r4-mapper csv convert patients.csv --output out.ndjson --export-errors rejected.csv
    """
    config = get_config(ctx)
    date_mode = _date_mode(legacy_dates, config.loader.date_mode)

    if pretty and output_format == "ndjson":
        click.secho("Note: --pretty is ignored for ndjson output", fg="yellow", err=True)
    codec = JsonPatientCodec(
        pretty_print=output_format == "json" and (pretty or config.codec.pretty_print)
    )

    try:
        logger.info(f"Converting CSV file: {file}")
        result = load_patients(
            file,
            fail_fast=fail_fast or config.loader.fail_fast,
            date_mode=date_mode,
            encoding=config.loader.encoding,
        )

        encoded = [codec.encode(patient) for patient in result.patients]
        with click.open_file(str(output) if output else "-", "w", encoding="utf-8") as out:
            if output_format == "json":
                out.write("[" + ",\n".join(encoded) + "]\n")
            else:
                for line in encoded:
                    out.write(line + "\n")

        click.echo(
            f"Converted {len(result.patients)} of {result.total_rows} row(s)",
            err=True,
        )

        if result.malformed_rows:
            click.secho(
                f"Skipped {len(result.malformed_rows)} malformed row(s)",
                fg="yellow",
                err=True,
            )
            for error in result.malformed_rows[:10]:
                click.echo(f"  Line {error.line_number}: {error.reason}", err=True)
            if export_errors:
                count = export_malformed_rows(result, export_errors)
                click.echo(f"Exported {count} malformed row(s) to: {export_errors}", err=True)

        if result.truncated:
            click.secho(f"Read error: {result.read_error}", fg="red", err=True)
            sys.exit(1)

        logger.info("CSV conversion complete. Exit code: 0")
        sys.exit(0)

    except MalformedRowError as e:
        click.secho(f"Malformed row: {e}", fg="red", err=True)
        logger.error(f"Conversion stopped at malformed row: {e}")
        sys.exit(1)
    except EncodeError as e:
        click.secho(f"Encoding error: {e}", fg="red", err=True)
        logger.error(f"Encoding error: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        click.secho(f"File not found: {e}", fg="red", err=True)
        logger.error(f"File not found: {e}")
        sys.exit(1)


@csv.command("validate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.option(
    "--legacy-dates",
    is_flag=True,
    help="Parse birth dates with the legacy yyyy-mm-dd (minutes) pattern",
)
@click.pass_context
def validate_csv_command(
    ctx: click.Context, file: Path, json_output: bool, legacy_dates: bool
) -> None:
    """Check that every row of a patients.csv file can be mapped.

    Exits with code 0 when every row maps, code 1 when any row is malformed
    or the file could not be read completely.

    Examples:

        # Human-readable report
        fhir-r4-mapper csv validate patients.csv

        # Machine-readable report
        fhir-r4-mapper csv validate patients.csv --json
    """
    config = get_config(ctx)
    date_mode = _date_mode(legacy_dates, config.loader.date_mode)

    logger.info(f"Validating CSV file: {file}")
    result = load_patients(file, date_mode=date_mode, encoding=config.loader.encoding)

    if json_output:
        click.echo(json_lib.dumps(result.to_dict(), indent=2))
    elif result.has_errors:
        click.secho(result.format_report(), fg="red", err=True)
    else:
        click.secho(result.format_report(), fg="green")

    if result.has_errors:
        logger.error("Validation failed with errors")
        sys.exit(1)

    logger.info("Validation complete. Exit code: 0")
    sys.exit(0)
