"""Command to uninstall extensions."""

import click

from pact_cli.cli.ensure import Ensure, extension_errors
from pact_cli.core.context import PactContext
from pact_cli.core.lifecycle import uninstall_all, uninstall_extension
from pact_cli.output import user_output


@click.command("uninstall")
@click.argument("name", required=False)
@click.option("--all", "uninstall_everything", is_flag=True, help="Uninstall all extensions")
@click.pass_obj
def uninstall_cmd(ctx: PactContext, name: str | None, uninstall_everything: bool) -> None:
    """Uninstall an extension.

    Uninstalling pact-legacy removes every bundled legacy tool with it.
    """
    with extension_errors():
        if uninstall_everything:
            removed = uninstall_all(ctx)
            if not removed:
                user_output("No extensions are currently installed.")
        else:
            name = Ensure.not_none(name, "Please specify an extension name or use --all flag")
            uninstall_extension(ctx, name)
