"""Workspace folder selection."""

from abc import ABC, abstractmethod
from pathlib import Path

# File that marks the root of a BeeWare project
WORKSPACE_MARKER = "pyproject.toml"


class Workspace(ABC):
    """Abstract interface for choosing the folder a command operates on."""

    @abstractmethod
    def select_workspace_folder(self) -> Path | None:
        """Return the workspace folder, or None when no folder applies.

        Callers treat None as a silent abort: nothing to build or run.
        """
        ...


class RealWorkspace(Workspace):
    """Selects an explicit folder, or discovers one from the current directory.

    Discovery walks up from cwd to the first directory holding pyproject.toml.

    Example:
        >>> RealWorkspace(cwd=Path("/work/helloworld/src/helloworld")).select_workspace_folder()
        PosixPath('/work/helloworld')
    """

    def __init__(self, *, cwd: Path, explicit: Path | None = None) -> None:
        self._cwd = cwd
        self._explicit = explicit

    def select_workspace_folder(self) -> Path | None:
        if self._explicit is not None:
            if not self._explicit.is_dir():
                return None
            return self._explicit.resolve()

        start = self._cwd.resolve()
        for candidate in (start, *start.parents):
            if (candidate / WORKSPACE_MARKER).is_file():
                return candidate
        return None
