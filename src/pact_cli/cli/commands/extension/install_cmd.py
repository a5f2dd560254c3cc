"""Command to install extensions."""

import click

from pact_cli.cli.ensure import Ensure, extension_errors
from pact_cli.core.context import PactContext
from pact_cli.core.lifecycle import INSTALLABLE_NAMES, install_all, install_extension


@click.command("install")
@click.argument("name", required=False, type=click.Choice(INSTALLABLE_NAMES))
@click.option("--all", "install_everything", is_flag=True, help="Install all available extensions")
@click.option("--version", help="Specific version to install (defaults to latest)")
@click.pass_obj
def install_cmd(
    ctx: PactContext, name: str | None, install_everything: bool, version: str | None
) -> None:
    """Install an extension.

    Installing pact-legacy also makes each bundled legacy tool available as
    its own command (pact-broker-legacy, mock-legacy, ...).
    """
    with extension_errors():
        if install_everything:
            install_all(ctx, version)
        else:
            name = Ensure.not_none(name, "Please specify an extension name or use --all flag")
            install_extension(ctx, name, version)
