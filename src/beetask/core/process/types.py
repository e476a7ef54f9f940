"""Value types and errors shared by process service implementations."""

import threading
from dataclasses import dataclass
from typing import Literal

OutputSource = Literal["stdout", "stderr"]


@dataclass(frozen=True)
class OutputLine:
    """One line of child process output.

    Attributes:
        source: Stream the line was read from
        out: Line content without the trailing newline
    """

    source: OutputSource
    out: str


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a process service.

    Safe to cancel from any thread. Process services poll is_cancelled while
    streaming and kill the child once it flips.

    Example:
        >>> token = CancellationToken()
        >>> token.is_cancelled
        False
        >>> token.cancel()
        >>> token.is_cancelled
        True
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class ProcessExecutionError(RuntimeError):
    """Raised when a streamed child process cannot start or exits non-zero.

    Attributes:
        command: Full command line that was executed
        returncode: Exit code, or None if the process never started
    """

    def __init__(self, message: str, *, command: list[str], returncode: int | None) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class ProcessCancelledError(ProcessExecutionError):
    """Raised when streaming stops because the cancellation token was cancelled."""
