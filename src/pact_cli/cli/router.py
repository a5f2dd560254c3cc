"""Decide what an unrecognised command token refers to.

A token is resolved once into exactly one Route variant and callers branch on
the variant, instead of trying static commands and extensions in turn.
"""

from collections.abc import Collection
from dataclasses import dataclass

from pact_cli.core.context import PactContext
from pact_cli.core.invoker import external_binary_name


@dataclass(frozen=True)
class StaticCommand:
    """Token names a command built into the CLI."""

    name: str


@dataclass(frozen=True)
class RegisteredExtension:
    """Token names an installed extension recorded in the registry."""

    name: str
    binary_path: str


@dataclass(frozen=True)
class PathExternalBinary:
    """Token names a ``pact-<name>`` executable found on PATH."""

    name: str
    binary_path: str


@dataclass(frozen=True)
class Unknown:
    """Token is neither a command nor a discoverable extension."""

    token: str


Route = StaticCommand | RegisteredExtension | PathExternalBinary | Unknown


def resolve_route(
    ctx: PactContext,
    token: str,
    static_commands: Collection[str],
    *,
    name_prefix: str = "",
) -> Route:
    """Resolve a command token to a Route.

    An extension is only routed to when it is discoverable as installed: a
    registry record flagged installed, or (for names the registry does not
    know) a PATH executable following the ``pact-<name>`` convention. A
    registry record that is not installed resolves to Unknown.

    Args:
        ctx: Application context
        token: Command token typed by the user
        static_commands: Names of commands built into the current group
        name_prefix: Prefix applied to the token to form the extension name
            (``pactflow-`` under the ``pactflow`` container)
    """
    if token in static_commands:
        return StaticCommand(name=token)

    name = f"{name_prefix}{token}"
    record = ctx.registry_store.load().get(name)
    if record is not None:
        if record.installed:
            return RegisteredExtension(name=name, binary_path=record.binary_path)
        return Unknown(token=token)

    path = ctx.processes.which(external_binary_name(name))
    if path is not None:
        return PathExternalBinary(name=name, binary_path=path)
    return Unknown(token=token)
