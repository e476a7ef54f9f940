"""Build and run tasks for BeeWare applications.

A task selects the workspace folder, makes sure the toolchain module is
installed, then runs `<python> <toolchain args...> {build|run} <target>` and
forwards every output line to this module's logger and to the console.

Outcomes:
- "completed": the toolchain exited successfully
- "aborted": nothing was run (no workspace, or the module is unavailable)
- TaskFailedError: the toolchain failed; never retried
"""

import logging
import time
from pathlib import Path
from typing import Literal

from beetask.core.formatting import format_duration
from beetask.core.context import BeeTaskContext
from beetask.core.execution_helper import build_execution_args
from beetask.core.process import (
    CancellationToken,
    ProcessCancelledError,
    ProcessExecutionError,
)

logger = logging.getLogger(__name__)

APPLICATION_NAME = "BeeWare"

# Module that provides the toolchain inside the workspace interpreter
REQUIRED_MODULE = "beeware"

TaskMode = Literal["build", "run"]
TaskOutcome = Literal["completed", "aborted"]


class TaskFailedError(RuntimeError):
    """Raised when the toolchain process fails; the process error is the __cause__."""

    def __init__(self, mode: TaskMode, target: str, message: str) -> None:
        super().__init__(message)
        self.mode = mode
        self.target = target


class TaskCancelledError(TaskFailedError):
    """Raised when the toolchain process was cancelled before it finished."""


def _label(mode: TaskMode) -> str:
    return "Build" if mode == "build" else "Run"


def _progress_title(mode: TaskMode, target: str) -> str:
    verb = "Building" if mode == "build" else "Running"
    return f"{verb} {APPLICATION_NAME} on {target}"


class BuildRunTaskProvider:
    """Runs the BeeWare toolchain for a target using the context's collaborators."""

    def __init__(self, ctx: BeeTaskContext) -> None:
        self._ctx = ctx

    def build(self, target: str, token: CancellationToken | None = None) -> TaskOutcome:
        return self._build_handler("build", target, token)

    def run(self, target: str, token: CancellationToken | None = None) -> TaskOutcome:
        return self._build_handler("run", target, token)

    def _build_handler(
        self, mode: TaskMode, target: str, token: CancellationToken | None
    ) -> TaskOutcome:
        label = _label(mode)
        logger.info("")
        logger.info("%s '%s'", label, target)

        workspace = self._ctx.workspace.select_workspace_folder()
        if workspace is None:
            logger.debug("No workspace folder selected")
            return "aborted"

        if not self._check_and_install_module(REQUIRED_MODULE, workspace):
            return "aborted"

        service = self._ctx.process_factory.create(workspace)
        settings = self._ctx.config_store.load(workspace)
        execution_info = build_execution_args(settings.python_path, settings.beeware_path)
        args = [*execution_info.args, mode, target]

        console = self._ctx.console
        console.print(f"--- {_progress_title(mode, target)} ---", style="bold")
        start_time = time.monotonic()

        try:
            for item in service.exec_observable(
                execution_info.command, args, cwd=workspace, token=token
            ):
                if item.source == "stderr":
                    logger.error("%s", item.out)
                    console.print(item.out, style="red", markup=False, highlight=False)
                else:
                    logger.info("%s", item.out)
                    console.print(item.out, markup=False, highlight=False)
        except ProcessCancelledError as e:
            duration_str = format_duration(time.monotonic() - start_time)
            logger.warning("%s cancelled", label)
            console.print(f"--- Cancelled ({duration_str}) ---", style="yellow")
            raise TaskCancelledError(mode, target, f"{label} cancelled") from e
        except ProcessExecutionError as e:
            duration_str = format_duration(time.monotonic() - start_time)
            logger.error("%s failed: %s", label, e)
            console.print(f"--- Failed ({duration_str}) ---", style="red")
            raise TaskFailedError(mode, target, f"{label} failed: {e}") from e

        duration_str = format_duration(time.monotonic() - start_time)
        console.print(f"--- Done ({duration_str}) ---", style="green")
        return "completed"

    def _check_and_install_module(self, module_name: str, workspace: Path) -> bool:
        installer = self._ctx.module_installer
        logger.info("Checking if module '%s' is installed.", module_name)
        if not installer.is_installed(module_name, workspace):
            if not self._ctx.prompt.confirm_install(module_name):
                logger.info("Installation of module '%s' declined.", module_name)
                return False
            if not installer.install(module_name, workspace):
                self._ctx.console.print(
                    f"Could not install module '{module_name}'; nothing was run", style="red"
                )
                return False

        logger.info("Module '%s' is installed.", module_name)
        return True
