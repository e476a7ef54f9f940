"""Module installer: checks for and installs packages into the workspace interpreter."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from beetask.core.config_store import ConfigStore
from beetask.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)


class ModuleInstaller(ABC):
    """Abstract interface for module installation.

    The interpreter used is the one configured for the workspace, so a
    module reported as installed is importable by the toolchain command.
    """

    @abstractmethod
    def is_installed(self, module_name: str, workspace: Path) -> bool:
        """Check whether module_name is installed for the workspace interpreter."""
        ...

    @abstractmethod
    def install(self, module_name: str, workspace: Path) -> bool:
        """Install module_name into the workspace interpreter.

        Returns:
            True if installation succeeded, False otherwise. Failures are
            logged, not raised.
        """
        ...


class PipModuleInstaller(ModuleInstaller):
    """Production implementation running `<python_path> -m pip` in the workspace."""

    def __init__(self, config_store: ConfigStore) -> None:
        self._config_store = config_store

    def _python_path(self, workspace: Path) -> str:
        return self._config_store.load(workspace).python_path

    def is_installed(self, module_name: str, workspace: Path) -> bool:
        python_path = self._python_path(workspace)
        try:
            result = run_subprocess_with_context(
                [python_path, "-m", "pip", "show", module_name],
                operation_context=f"check module '{module_name}'",
                cwd=workspace,
                check=False,
            )
        except RuntimeError as e:
            # Interpreter missing: nothing can be installed for it either
            logger.debug("Module check failed: %s", e)
            return False
        return result.returncode == 0

    def install(self, module_name: str, workspace: Path) -> bool:
        python_path = self._python_path(workspace)
        logger.info("Installing module '%s' with %s", module_name, python_path)
        try:
            run_subprocess_with_context(
                [python_path, "-m", "pip", "install", module_name],
                operation_context=f"install module '{module_name}'",
                cwd=workspace,
            )
        except RuntimeError as e:
            logger.error("%s", e)
            return False
        return True
