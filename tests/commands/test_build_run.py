"""Tests for the build and run commands."""

import os
import signal
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from beetask.cli.cli import cli
from beetask.core.config_store import WorkspaceSettings
from beetask.core.context import BeeTaskContext
from beetask.core.process import (
    CancellationToken,
    OutputLine,
    ProcessCancelledError,
    ProcessExecutionError,
)
from tests.fakes.config_store import FakeConfigStore
from tests.fakes.module_installer import FakeModuleInstaller
from tests.fakes.process import FakeProcessServiceFactory
from tests.fakes.user_prompt import FakeUserPrompt
from tests.fakes.workspace import FakeWorkspace

WORKSPACE = Path("/projects/helloworld")


def test_build_streams_output_and_exits_zero() -> None:
    process = FakeProcessServiceFactory(
        lines=[OutputLine("stdout", "[helloworld] Built build/helloworld/linux")]
    )
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        process_factory=process,
    )

    result = CliRunner().invoke(cli, ["build", "linux"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "--- Building BeeWare on linux ---" in result.output
    assert "[helloworld] Built build/helloworld/linux" in result.output
    assert process.executions[0][1][-2:] == ["build", "linux"]


def test_run_uses_run_subcommand() -> None:
    process = FakeProcessServiceFactory()
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        config_store=FakeConfigStore(
            settings=WorkspaceSettings(python_path="/venv/bin/python", beeware_path="briefcase")
        ),
        process_factory=process,
    )

    result = CliRunner().invoke(cli, ["run", "android"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "--- Running BeeWare on android ---" in result.output
    assert process.executions == [
        ("/venv/bin/python", ["-m", "briefcase", "run", "android"], WORKSPACE)
    ]


def test_no_workspace_is_a_silent_success() -> None:
    process = FakeProcessServiceFactory()
    ctx = BeeTaskContext.for_test(workspace=FakeWorkspace(folder=None), process_factory=process)

    result = CliRunner().invoke(cli, ["build", "android"], obj=ctx)

    assert result.exit_code == 0
    assert result.output == ""
    assert process.executions == []


def test_declined_install_exits_zero_without_running() -> None:
    process = FakeProcessServiceFactory()
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        module_installer=FakeModuleInstaller(installed=set()),
        prompt=FakeUserPrompt(answer=False),
        process_factory=process,
    )

    result = CliRunner().invoke(cli, ["build", "android"], obj=ctx)

    assert result.exit_code == 0
    assert process.executions == []


def test_toolchain_failure_exits_one_with_error() -> None:
    error = ProcessExecutionError(
        "Command exited with code 1", command=["python"], returncode=1
    )
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        process_factory=FakeProcessServiceFactory(error=error),
    )

    result = CliRunner().invoke(cli, ["build", "iOS"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Build failed: Command exited with code 1" in result.output


def test_cancellation_exits_130() -> None:
    error = ProcessCancelledError("Cancelled", command=["python"], returncode=-15)
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        process_factory=FakeProcessServiceFactory(error=error),
    )

    result = CliRunner().invoke(cli, ["run", "android"], obj=ctx)

    assert result.exit_code == 130
    assert "Cancelled" in result.output


def test_invalid_settings_exit_one() -> None:
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        config_store=FakeConfigStore(
            settings=WorkspaceSettings(python_path="python", beeware_path="")
        ),
    )

    result = CliRunner().invoke(cli, ["build", "android"], obj=ctx)

    assert result.exit_code == 1
    assert "beeware_path must not be empty" in result.output


def test_target_is_required() -> None:
    result = CliRunner().invoke(cli, ["build"], obj=BeeTaskContext.for_test())

    assert result.exit_code == 2
    assert "Missing argument 'TARGET'" in result.output


def test_ctrl_c_at_install_prompt_exits_130() -> None:
    process = FakeProcessServiceFactory()
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        module_installer=FakeModuleInstaller(installed=set()),
        prompt=FakeUserPrompt(answer=True, interrupt=True),
        process_factory=process,
    )

    result = CliRunner().invoke(cli, ["build", "android"], obj=ctx)

    assert result.exit_code == 130
    assert "Cancelled" in result.output
    assert process.executions == []


class _SigtermOnStart(FakeProcessServiceFactory):
    """Delivers SIGTERM to this process as soon as the toolchain starts."""

    def exec_observable(
        self,
        command: str,
        args: list[str],
        *,
        cwd: Path,
        token: CancellationToken | None = None,
    ) -> Iterator[OutputLine]:
        os.kill(os.getpid(), signal.SIGTERM)
        yield from super().exec_observable(command, args, cwd=cwd, token=token)


@pytest.mark.skipif(sys.platform == "win32", reason="SIGTERM handlers are POSIX only")
def test_sigterm_cancels_task_and_exits_130() -> None:
    process = _SigtermOnStart(lines=[OutputLine("stdout", "never shown")])
    ctx = BeeTaskContext.for_test(
        workspace=FakeWorkspace(folder=WORKSPACE),
        process_factory=process,
    )
    previous_handler = signal.getsignal(signal.SIGTERM)

    result = CliRunner().invoke(cli, ["run", "android"], obj=ctx)

    assert result.exit_code == 130
    assert "never shown" not in result.output
    assert "--- Cancelled" in result.output
    assert signal.getsignal(signal.SIGTERM) == previous_handler
