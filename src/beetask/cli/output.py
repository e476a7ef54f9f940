"""Output utilities for CLI commands with clear intent.

- user_output: messages for the person at the terminal (stderr)
- machine_output: data meant to be consumed by scripts (stdout)
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Print a user-facing message to stderr."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Print structured output to stdout."""
    click.echo(message, nl=nl)

