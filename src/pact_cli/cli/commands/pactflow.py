"""PactFlow command group.

Installed ``pactflow-<name>`` extensions are reachable as ``pact pactflow <name>``.
"""

import click

from pact_cli.cli.extension_group import ExtensionRoutingGroup

PACTFLOW_EXTENSION_PREFIX = "pactflow-"


@click.group("pactflow", cls=ExtensionRoutingGroup, name_prefix=PACTFLOW_EXTENSION_PREFIX)
def pactflow_group() -> None:
    """PactFlow commands provided by installed extensions."""
    pass
