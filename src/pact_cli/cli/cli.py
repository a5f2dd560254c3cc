import logging
import os

import click

from pact_cli.cli.commands.extension import extension_group
from pact_cli.cli.commands.pactflow import pactflow_group
from pact_cli.cli.ensure import ensure_pact_context
from pact_cli.cli.extension_group import ExtensionRoutingGroup

DEBUG_ENV = "PACT_DEBUG"

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"], max_content_width=120)


@click.group(cls=ExtensionRoutingGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="pact-cli")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Pact command line tool.

    Commands not built into pact run the installed extension of that name.
    """
    ensure_pact_context(ctx)


cli.add_command(extension_group)
cli.add_command(pactflow_group)


def main() -> None:
    """CLI entry point used by the `pact` console script."""
    if os.getenv(DEBUG_ENV):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    cli()
