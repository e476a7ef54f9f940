"""Process execution interface.

Follows the ops pattern: an ABC for dependency injection, a subprocess-backed
real implementation, and an in-memory fake in tests/fakes for unit tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

from beetask.core.process.types import CancellationToken, OutputLine


class ProcessService(ABC):
    """Spawns a single external process and streams its output."""

    @abstractmethod
    def exec_observable(
        self,
        command: str,
        args: list[str],
        *,
        cwd: Path,
        token: CancellationToken | None = None,
    ) -> Iterator[OutputLine]:
        """Run command and yield its output lines as they arrive.

        Lines from stdout and stderr are interleaved in arrival order and
        tagged with their source. The iterator ends when the process exits
        successfully.

        Args:
            command: Executable to run (e.g., the workspace interpreter)
            args: Arguments passed to the executable
            cwd: Working directory of the child process
            token: Optional cancellation token polled between lines

        Yields:
            OutputLine objects in arrival order

        Raises:
            ProcessExecutionError: If the process cannot start or exits non-zero,
                raised after every output line has been yielded
            ProcessCancelledError: If token was cancelled; the child is killed

        Example:
            >>> service = RealProcessService()
            >>> for line in service.exec_observable("python", ["-V"], cwd=Path(".")):
            ...     print(line.source, line.out)
            stdout Python 3.12.1
        """
        ...


class ProcessServiceFactory(ABC):
    """Creates process services bound to a workspace folder."""

    @abstractmethod
    def create(self, workspace: Path) -> ProcessService:
        """Create a process service for commands run inside workspace.

        Args:
            workspace: Workspace folder the commands belong to

        Returns:
            ProcessService ready to spawn commands
        """
        ...
