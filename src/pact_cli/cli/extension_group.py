"""Click group that dispatches unknown subcommands to extensions."""

import logging

import click

from pact_cli.cli.ensure import ensure_pact_context, extension_errors
from pact_cli.cli.router import PathExternalBinary, RegisteredExtension, Unknown, resolve_route
from pact_cli.core.invoker import run_extension
from pact_cli.output import user_output

logger = logging.getLogger(__name__)


class ExtensionPassthroughCommand(click.Command):
    """Runs one extension with the remaining tokens forwarded untouched.

    Argument parsing is bypassed entirely so options such as ``--help`` or a
    literal ``--`` reach the extension exactly as typed.
    """

    def __init__(self, name: str, extension_name: str) -> None:
        super().__init__(
            name,
            help=f"Run the {extension_name} extension.",
            add_help_option=False,
        )
        self.extension_name = extension_name

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.args = list(args)
        return ctx.args

    def invoke(self, ctx: click.Context) -> None:
        pact_ctx = ensure_pact_context(ctx)
        with extension_errors():
            exit_code = run_extension(pact_ctx, self.extension_name, ctx.args)
        ctx.exit(exit_code)


class ExtensionRoutingGroup(click.Group):
    """Click group whose unknown subcommands are resolved as extensions.

    Static subcommands always win. Any other token becomes
    ``<name_prefix><token>`` and runs through the invoker when it is
    discoverable as installed. Otherwise the group either shows top-level
    help and exits 1, or, with ``invoke_unknown``, hands the token to the
    invoker anyway so it can report an actionable error.

    Help output lists installed extensions in their own section after the
    built-in commands.
    """

    def __init__(
        self,
        *args,
        name_prefix: str = "",
        invoke_unknown: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.name_prefix = name_prefix
        self.invoke_unknown = invoke_unknown

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        token = args[0]
        if token.startswith("-") or self.get_command(ctx, token) is not None:
            return super().resolve_command(ctx, args)

        pact_ctx = ensure_pact_context(ctx)
        route = resolve_route(
            pact_ctx, token, self.list_commands(ctx), name_prefix=self.name_prefix
        )
        logger.debug("Resolved %r to %s", token, route)

        match route:
            case RegisteredExtension(name=name) | PathExternalBinary(name=name):
                return token, ExtensionPassthroughCommand(token, name), args[1:]
            case Unknown() if self.invoke_unknown:
                name = f"{self.name_prefix}{token}"
                return token, ExtensionPassthroughCommand(token, name), args[1:]
            case _:
                user_output(
                    click.style("Error: ", fg="red")
                    + f"No such command or installed extension: '{token}'"
                )
                user_output()
                root = ctx.find_root()
                user_output(root.command.get_help(root))
                ctx.exit(1)

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_commands(ctx, formatter)

        extensions = self._installed_extensions(ctx)
        if not extensions:
            return
        with formatter.section("Installed Extensions"):
            formatter.write_dl(extensions)

    def _installed_extensions(self, ctx: click.Context) -> list[tuple[str, str]]:
        pact_ctx = ensure_pact_context(ctx)
        static_commands = set(self.list_commands(ctx))
        rows: list[tuple[str, str]] = []
        for name, record in sorted(pact_ctx.registry_store.load().items()):
            if not record.installed or not name.startswith(self.name_prefix):
                continue
            command_name = name.removeprefix(self.name_prefix)
            if not command_name or command_name in static_commands:
                continue
            rows.append((command_name, f"{record.extension_kind.display_name} {record.version}"))
        return rows
