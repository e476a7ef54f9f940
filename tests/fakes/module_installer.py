"""Fake implementation of ModuleInstaller for testing.

This fake enables testing module checks and installation without
running pip or touching any interpreter.
"""

from pathlib import Path

from beetask.core.module_installer import ModuleInstaller


class FakeModuleInstaller(ModuleInstaller):
    """In-memory fake implementation of module installation.

    Constructor Injection:
    - Installed modules are provided via constructor parameters
    - Mutations are tracked in read-only properties

    Examples:
        # Module already installed
        >>> installer = FakeModuleInstaller(installed={"beeware"})
        >>> installer.is_installed("beeware", Path("/repo"))
        True

        # Installation that fails
        >>> installer = FakeModuleInstaller(install_succeeds=False)
        >>> installer.install("beeware", Path("/repo"))
        False
    """

    def __init__(
        self,
        *,
        installed: set[str] | None = None,
        install_succeeds: bool = True,
    ) -> None:
        """Initialize fake with predetermined behavior.

        Args:
            installed: Module names reported as installed
            install_succeeds: Whether install() succeeds (and marks the module installed)
        """
        self._installed = set(installed) if installed is not None else set()
        self._install_succeeds = install_succeeds
        self._check_calls: list[tuple[str, Path]] = []
        self._install_calls: list[tuple[str, Path]] = []

    def is_installed(self, module_name: str, workspace: Path) -> bool:
        self._check_calls.append((module_name, workspace))
        return module_name in self._installed

    def install(self, module_name: str, workspace: Path) -> bool:
        self._install_calls.append((module_name, workspace))
        if self._install_succeeds:
            self._installed.add(module_name)
        return self._install_succeeds

    @property
    def check_calls(self) -> list[tuple[str, Path]]:
        """List of (module_name, workspace) is_installed() calls. For test assertions only."""
        return self._check_calls.copy()

    @property
    def install_calls(self) -> list[tuple[str, Path]]:
        """List of (module_name, workspace) install() calls. For test assertions only."""
        return self._install_calls.copy()
