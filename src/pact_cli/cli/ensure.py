"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages, and the boundary that turns
lifecycle errors into a red "Error:" line and exit code 1.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn, TypeVar

import click

from pact_cli.core.context import PactContext, create_context
from pact_cli.core.errors import ExtensionError
from pact_cli.output import user_output

T = TypeVar("T")


def _fail(message: str) -> NoReturn:
    user_output(click.style("Error: ", fg="red") + message)
    raise SystemExit(1)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            _fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Returns the value with its type narrowed to exclude None.

        Example:
            >>> name = Ensure.not_none(name, "Please specify an extension name")
        """
        if value is None:
            _fail(error_message)
        return value


@contextmanager
def extension_errors() -> Iterator[None]:
    """Report ExtensionError as a styled message and exit with code 1.

    Example:
        >>> with extension_errors():
        ...     install_extension(ctx, "pactflow-ai", None)
    """
    try:
        yield
    except ExtensionError as e:
        _fail(str(e))


def ensure_pact_context(ctx: click.Context) -> PactContext:
    """Return the PactContext stored on the root click context, creating it once.

    Tests provide the context through ``CliRunner.invoke(obj=...)``; production
    runs create it lazily here because command routing can happen before the
    root group callback runs.
    """
    root = ctx.find_root()
    if root.obj is None:
        try:
            root.obj = create_context()
        except ValueError as e:
            raise click.ClickException(str(e)) from e
    if ctx.obj is None:
        ctx.obj = root.obj
    return root.obj
