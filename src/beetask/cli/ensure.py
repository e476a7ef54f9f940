"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

from pathlib import Path
from typing import NoReturn, TypeVar

import click

from beetask.cli.output import user_output

T = TypeVar("T")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def fail(error_message: str, exit_code: int = 1) -> NoReturn:
        """Output styled error and exit unconditionally.

        Raises:
            SystemExit: Always, with exit_code
        """
        user_output(click.style("Error: ", fg="red") + error_message)
        raise SystemExit(exit_code)

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
            Ensure.fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Provides type narrowing: takes `T | None` and returns `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            Ensure.fail(error_message)
        return value

    @staticmethod
    def workspace_selected(workspace: Path | None) -> Path:
        """Ensure a workspace folder was found, otherwise output styled error and exit.

        Example:
            >>> workspace = Ensure.workspace_selected(ctx.workspace.select_workspace_folder())
        """
        return Ensure.not_none(
            workspace,
            "No workspace folder found - Run from inside a project with a pyproject.toml "
            "or pass --workspace",
        )
