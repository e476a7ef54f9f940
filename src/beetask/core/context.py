"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from beetask.core.config_store import ConfigStore, RealConfigStore
from beetask.core.module_installer import ModuleInstaller, PipModuleInstaller
from beetask.core.process import ProcessServiceFactory, RealProcessServiceFactory
from beetask.core.user_prompt import AssumeYesPrompt, InteractivePrompt, UserPrompt
from beetask.core.workspace import RealWorkspace, Workspace


@dataclass(frozen=True)
class BeeTaskContext:
    """Immutable context holding all dependencies for beetask operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    workspace: Workspace
    config_store: ConfigStore
    module_installer: ModuleInstaller
    process_factory: ProcessServiceFactory
    prompt: UserPrompt
    console: Console
    cwd: Path  # Current working directory at CLI invocation

    @staticmethod
    def for_test(
        workspace: Workspace | None = None,
        config_store: ConfigStore | None = None,
        module_installer: ModuleInstaller | None = None,
        process_factory: ProcessServiceFactory | None = None,
        prompt: UserPrompt | None = None,
        console: Console | None = None,
        cwd: Path | None = None,
    ) -> "BeeTaskContext":
        """Create test context with optional pre-configured collaborators.

        Unspecified collaborators default to their in-memory fakes: a
        workspace at cwd, default settings, an installed "beeware" module,
        a process that prints nothing, and a prompt that declines.

        Example:
            >>> process = FakeProcessServiceFactory(lines=[OutputLine("stdout", "ok")])
            >>> ctx = BeeTaskContext.for_test(process_factory=process)
        """
        from tests.fakes.config_store import FakeConfigStore
        from tests.fakes.module_installer import FakeModuleInstaller
        from tests.fakes.process import FakeProcessServiceFactory
        from tests.fakes.user_prompt import FakeUserPrompt
        from tests.fakes.workspace import FakeWorkspace

        if cwd is None:
            cwd = Path("/test/default/cwd")

        return BeeTaskContext(
            workspace=workspace if workspace is not None else FakeWorkspace(folder=cwd),
            config_store=config_store if config_store is not None else FakeConfigStore(),
            module_installer=(
                module_installer
                if module_installer is not None
                else FakeModuleInstaller(installed={"beeware"})
            ),
            process_factory=(
                process_factory if process_factory is not None else FakeProcessServiceFactory()
            ),
            prompt=prompt if prompt is not None else FakeUserPrompt(answer=False),
            console=console if console is not None else Console(record=True, width=200),
            cwd=cwd,
        )


def create_context(
    *,
    workspace_path: Path | None = None,
    assume_yes: bool = False,
) -> BeeTaskContext:
    """Create production context with real implementations.

    Called once at CLI entry point.

    Args:
        workspace_path: Explicit workspace folder (--workspace); discovered from cwd if None
        assume_yes: Approve module installation without prompting (--yes)
    """
    cwd = Path.cwd()
    config_store = RealConfigStore()
    prompt: UserPrompt = AssumeYesPrompt() if assume_yes else InteractivePrompt()

    return BeeTaskContext(
        workspace=RealWorkspace(cwd=cwd, explicit=workspace_path),
        config_store=config_store,
        module_installer=PipModuleInstaller(config_store),
        process_factory=RealProcessServiceFactory(),
        prompt=prompt,
        console=Console(),
        cwd=cwd,
    )
