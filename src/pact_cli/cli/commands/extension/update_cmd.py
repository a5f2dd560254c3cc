"""Command to update installed extensions."""

import click

from pact_cli.cli.ensure import Ensure, extension_errors
from pact_cli.core.context import PactContext
from pact_cli.core.lifecycle import update_all, update_extension


@click.command("update")
@click.argument("name", required=False)
@click.option("--all", "update_everything", is_flag=True, help="Update all installed extensions")
@click.pass_obj
def update_cmd(ctx: PactContext, name: str | None, update_everything: bool) -> None:
    """Update an installed extension to its latest release."""
    with extension_errors():
        if update_everything:
            update_all(ctx)
        else:
            name = Ensure.not_none(name, "Please specify an extension name or use --all flag")
            update_extension(ctx, name)
