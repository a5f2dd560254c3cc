"""Output utilities shared by the lifecycle core and the CLI.

user_output is for human-facing messages and goes to stderr so that stdout
stays free for the output of extensions, which inherit it.
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)
