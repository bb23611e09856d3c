"""FHIR Patient CLI commands for the FHIR R4 mapper."""

import logging
import sys
from pathlib import Path

import click

from fhir_r4_mapper.codec.json_codec import decode
from fhir_r4_mapper.utils.exceptions import DecodeError

logger = logging.getLogger(__name__)


@click.group()
def patient() -> None:
    """FHIR Patient resource commands."""
    pass


@patient.command("decode")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def decode_patient_command(file: Path) -> None:
    """Parse a FHIR Patient JSON file and display a summary.

    Exits with code 1 if the file is not a valid FHIR Patient resource.

    Example:

        fhir-r4-mapper patient decode patient.json
    """
    try:
        resource = decode(file.read_text(encoding="utf-8"))
    except (DecodeError, UnicodeDecodeError) as e:
        click.secho(f"Decode Error: {e}", fg="red", err=True)
        logger.error(f"Failed to decode {file}: {e}")
        sys.exit(1)

    click.echo(f"Patient/{resource.id}")

    for name in resource.name or ():
        given = " ".join(name.given or ())
        suffix = " ".join(s for s in name.suffix or () if s)
        click.echo(f"  Name:           {name.family}, {given} {suffix}".rstrip())

    gender = resource.gender.value if resource.gender else "-"
    click.echo(f"  Gender:         {gender}")
    click.echo(f"  Birth date:     {resource.birth_date or '-'}")

    if resource.marital_status and resource.marital_status.coding:
        coding = resource.marital_status.coding[0]
        click.echo(f"  Marital status: {coding.display} ({coding.code})")

    for address in resource.address or ():
        line = ", ".join(address.line or ())
        click.echo(
            f"  Address:        {line}, {address.city}, {address.state} {address.postal_code}"
        )

    sys.exit(0)
