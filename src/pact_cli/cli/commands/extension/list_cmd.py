"""Command to list available and installed extensions."""

import click
from rich.console import Console
from rich.table import Table

from pact_cli.core.context import PactContext
from pact_cli.core.errors import ExtensionError
from pact_cli.core.families import ExtensionFamily, family_for_kind
from pact_cli.core.lifecycle import discover_path_extensions
from pact_cli.core.models import LATEST_VERSION, ExtensionKind, ExtensionRecord
from pact_cli.core.version_resolver import (
    UNKNOWN_VERSION,
    installed_binary_version,
    resolve_latest_version,
)
from pact_cli.output import user_output


def fetch_latest_versions(ctx: PactContext) -> dict[ExtensionFamily, str]:
    """Look up the latest release of each family.

    Lookup failures (offline, unsupported platform, bad response) are shown
    as "unknown" instead of failing the listing.
    """
    latest: dict[ExtensionFamily, str] = {}
    for family in ExtensionFamily:
        try:
            latest[family] = resolve_latest_version(ctx.http, family, ctx.platform)
        except ExtensionError:
            latest[family] = UNKNOWN_VERSION
    return latest


def installed_version(ctx: PactContext, record: ExtensionRecord) -> str:
    """Version to show for a listed extension.

    An installed pactflow-ai binary reports its own version, which stays
    accurate when the binary was placed without going through install. The
    recorded version is used when the binary cannot answer.
    """
    if not record.installed:
        return "-"
    if record.extension_kind is not ExtensionKind.REMOTE_SINGLE_BINARY:
        return record.version

    reported = installed_binary_version(ctx.processes, record.binary_path)
    if reported == UNKNOWN_VERSION and record.version != LATEST_VERSION:
        return record.version
    return reported


def format_status_cell(record: ExtensionRecord, version: str, latest_version: str | None) -> str:
    """Format status cell with Rich markup.

    Returns:
        - "[green]✓ installed[/green]" when installed and current (or not comparable)
        - "[yellow]↑ update available[/yellow]" when a newer release is known
        - "[dim]not installed[/dim]" otherwise
    """
    if not record.installed:
        return "[dim]not installed[/dim]"
    if latest_version in (None, UNKNOWN_VERSION):
        return "[green]✓ installed[/green]"
    if version in (LATEST_VERSION, UNKNOWN_VERSION, latest_version):
        return "[green]✓ installed[/green]"
    return "[yellow]↑ update available[/yellow]"


@click.command("list")
@click.option("--installed", "installed_only", is_flag=True, help="Show only installed extensions")
@click.pass_obj
def list_extensions_cmd(ctx: PactContext, installed_only: bool) -> None:
    """List available and installed extensions."""
    extensions = ctx.registry_store.list_extensions()
    extensions.update(discover_path_extensions(ctx, extensions))

    records = [r for r in extensions.values() if r.installed or not installed_only]
    if not records:
        user_output("No extensions are currently installed.")
        return

    latest = fetch_latest_versions(ctx)

    table = Table(show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("type", no_wrap=True)
    table.add_column("installed", no_wrap=True)
    table.add_column("latest", no_wrap=True)
    table.add_column("status", no_wrap=True)

    for record in sorted(records, key=lambda r: r.name):
        family = family_for_kind(record.extension_kind)
        latest_version = latest[family] if family is not None else None
        version = installed_version(ctx, record)
        table.add_row(
            record.name,
            record.extension_kind.display_name,
            version,
            latest_version or "-",
            format_status_cell(record, version, latest_version),
        )

    # Output table to stderr (consistent with user_output convention)
    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)
