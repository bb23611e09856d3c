"""Entry point for running fhir_r4_mapper as a module.

This allows the package to be executed as:
    python -m fhir_r4_mapper
"""

from fhir_r4_mapper.cli.main import cli

if __name__ == "__main__":
    cli()
