"""Extension command group."""

import click

from pact_cli.cli.commands.extension.install_cmd import install_cmd
from pact_cli.cli.commands.extension.list_cmd import list_extensions_cmd
from pact_cli.cli.commands.extension.uninstall_cmd import uninstall_cmd
from pact_cli.cli.commands.extension.update_cmd import update_cmd
from pact_cli.cli.extension_group import ExtensionRoutingGroup


@click.group("extension", cls=ExtensionRoutingGroup, invoke_unknown=True)
def extension_group() -> None:
    """Manage pact extensions.

    Any other subcommand runs the extension of that name, for example
    `pact extension pactflow-ai --help`.
    """
    pass


extension_group.add_command(install_cmd)
extension_group.add_command(list_extensions_cmd)
extension_group.add_command(uninstall_cmd)
extension_group.add_command(update_cmd)
