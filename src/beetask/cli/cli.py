import logging
import os
from pathlib import Path

import click

from beetask.cli.commands.build_run import build_cmd, run_cmd
from beetask.cli.commands.config import config_group
from beetask.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def _configure_logging(verbose: bool) -> None:
    # Enable debug logging if BEETASK_DEBUG environment variable is set
    if os.getenv("BEETASK_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    elif verbose:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="beetask")
@click.option(
    "--workspace",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Workspace folder to use instead of discovering it from the current directory.",
)
@click.option("-y", "--yes", is_flag=True, help="Install missing modules without asking.")
@click.option("-v", "--verbose", is_flag=True, help="Log task progress and output to stderr.")
@click.pass_context
def cli(ctx: click.Context, workspace: Path | None, yes: bool, verbose: bool) -> None:
    """Build and run BeeWare applications for a target platform."""
    _configure_logging(verbose)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(workspace_path=workspace, assume_yes=yes)


cli.add_command(build_cmd)
cli.add_command(run_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `beetask` console script."""
    cli()
