"""Helpers for reading shared state from the click context."""

import click

from fhir_r4_mapper.config.schema import Config


def get_config(ctx: click.Context) -> Config:
    """Return the Config loaded by the root command, or defaults.

    Commands invoked without the root group (e.g. directly in tests) have no
    context object, so defaults apply.
    """
    root = ctx.find_root()
    if isinstance(root.obj, dict) and "config" in root.obj:
        return root.obj["config"]
    return Config()
