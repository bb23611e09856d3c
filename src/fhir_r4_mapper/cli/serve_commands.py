"""Web service CLI command for the FHIR R4 mapper."""

import logging
from typing import Optional

import click
from pydantic import ValidationError

from fhir_r4_mapper.cli.context import get_config
from fhir_r4_mapper.config.schema import ServiceConfig
from fhir_r4_mapper.service.app import run_server

logger = logging.getLogger(__name__)


@click.command()
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", type=int, default=None, help="Listen port (overrides config)")
@click.option("--debug", is_flag=True, help="Enable Flask debug mode")
@click.pass_context
def serve(
    ctx: click.Context, host: Optional[str], port: Optional[int], debug: bool
) -> None:
    """Run the HTTP conversion service.

    Examples:

        fhir-r4-mapper serve

        fhir-r4-mapper serve --host 0.0.0.0 --port 9090
    """
    config = get_config(ctx)

    service_settings = config.service.model_dump()
    if host:
        service_settings["host"] = host
    if port is not None:
        service_settings["port"] = port

    try:
        service = ServiceConfig(**service_settings)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--port")

    config = config.model_copy(update={"service": service})

    click.echo(f"Starting FHIR R4 mapper service on http://{service.host}:{service.port}")
    logger.info(f"Serving with debug={debug}")
    run_server(config, debug=debug)
