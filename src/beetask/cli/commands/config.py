"""Config commands: inspect and change workspace settings."""

from pathlib import Path

import click

from beetask.cli.ensure import Ensure
from beetask.cli.output import machine_output, user_output
from beetask.core.config_store import SETTING_KEYS, SettingSource, WorkspaceSettings
from beetask.core.context import BeeTaskContext


def _load_or_fail(
    ctx: BeeTaskContext,
) -> tuple[Path, WorkspaceSettings, dict[str, SettingSource]]:
    workspace = Ensure.workspace_selected(ctx.workspace.select_workspace_folder())
    try:
        return workspace, ctx.config_store.load(workspace), ctx.config_store.sources(workspace)
    except ValueError as e:
        Ensure.fail(str(e))


@click.group("config")
def config_group() -> None:
    """Manage workspace settings."""


@config_group.command("show")
@click.pass_obj
def config_show(ctx: BeeTaskContext) -> None:
    """Print the effective settings and where each one comes from."""
    workspace, settings, sources = _load_or_fail(ctx)
    user_output(f"Workspace: {workspace}")
    values = {"python_path": settings.python_path, "beeware_path": settings.beeware_path}
    for key in SETTING_KEYS:
        machine_output(f"{key} = {values[key]}  " + click.style(f"({sources[key]})", dim=True))


@config_group.command("set")
@click.argument("key", type=click.Choice(SETTING_KEYS))
@click.argument("value")
@click.pass_obj
def config_set(ctx: BeeTaskContext, key: str, value: str) -> None:
    """Store KEY = VALUE in the workspace config file."""
    workspace = Ensure.workspace_selected(ctx.workspace.select_workspace_folder())
    Ensure.invariant(bool(value.strip()), f"Value for '{key}' must not be empty")
    ctx.config_store.set_value(workspace, key, value)
    config_path = ctx.config_store.path(workspace)
    user_output(click.style("✓ ", fg="green") + f"Set {key} in {config_path}")
