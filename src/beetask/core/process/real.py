"""Real process execution using subprocess.Popen and reader threads."""

import logging
import os
import queue
import subprocess
import threading
from collections import deque
from collections.abc import Iterator
from pathlib import Path
from typing import IO

from beetask.core.process.abc import ProcessService, ProcessServiceFactory
from beetask.core.process.types import (
    CancellationToken,
    OutputLine,
    OutputSource,
    ProcessCancelledError,
    ProcessExecutionError,
)

logger = logging.getLogger(__name__)

# Seconds between cancellation checks while waiting on the child
_POLL_INTERVAL = 0.1

# Number of stderr lines quoted in the failure message
_STDERR_TAIL_LINES = 20


def _pump(
    source: OutputSource,
    stream: IO[str],
    sink: "queue.Queue[tuple[OutputSource, str | None]]",
) -> None:
    """Copy lines from stream into sink, then post a None end marker."""
    try:
        for line in stream:
            sink.put((source, line.rstrip("\r\n")))
    finally:
        sink.put((source, None))


class RealProcessService(ProcessService):
    """Production implementation streaming output from a real child process.

    stdout and stderr are drained by two daemon threads into one queue, so
    lines reach the consumer in the order they were read. The child runs
    with PYTHONUNBUFFERED=1 so Python toolchains flush line by line.
    """

    def exec_observable(
        self,
        command: str,
        args: list[str],
        *,
        cwd: Path,
        token: CancellationToken | None = None,
    ) -> Iterator[OutputLine]:
        cmd = [command, *args]
        cmd_str = " ".join(cmd)
        logger.debug("Spawning %s in %s", cmd_str, cwd)

        try:
            process = subprocess.Popen(
                cmd,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,  # Line buffered
                env={**os.environ, "PYTHONUNBUFFERED": "1"},
            )
        except OSError as e:
            raise ProcessExecutionError(
                f"Could not start {command}: {e}\nCommand: {cmd_str}",
                command=cmd,
                returncode=None,
            ) from e

        lines: queue.Queue[tuple[OutputSource, str | None]] = queue.Queue()
        readers = [
            threading.Thread(target=_pump, args=("stdout", process.stdout, lines), daemon=True),
            threading.Thread(target=_pump, args=("stderr", process.stderr, lines), daemon=True),
        ]
        for reader in readers:
            reader.start()

        stderr_tail: deque[str] = deque(maxlen=_STDERR_TAIL_LINES)
        try:
            open_streams = len(readers)
            while open_streams:
                self._raise_if_cancelled(process, token, cmd)
                try:
                    source, text = lines.get(timeout=_POLL_INTERVAL)
                except queue.Empty:
                    continue
                if text is None:
                    open_streams -= 1
                    continue
                if source == "stderr":
                    stderr_tail.append(text)
                yield OutputLine(source=source, out=text)

            while True:
                self._raise_if_cancelled(process, token, cmd)
                try:
                    returncode = process.wait(timeout=_POLL_INTERVAL)
                    break
                except subprocess.TimeoutExpired:
                    continue
        finally:
            # Covers early close of the iterator as well as errors
            if process.poll() is None:
                logger.debug("Killing pid=%s", process.pid)
                process.kill()
                process.wait()
            for reader, stream in zip(readers, (process.stdout, process.stderr)):
                reader.join(timeout=1.0)
                # A reader still blocked (pipe inherited by a grandchild) owns its stream
                if stream is not None and not reader.is_alive():
                    stream.close()

        logger.debug("%s exited with code %d", cmd_str, returncode)
        if returncode != 0:
            error_msg = f"Command exited with code {returncode}\nCommand: {cmd_str}"
            if stderr_tail:
                error_msg += "\nstderr:\n" + "\n".join(stderr_tail)
            raise ProcessExecutionError(error_msg, command=cmd, returncode=returncode)

    def _raise_if_cancelled(
        self, process: subprocess.Popen[str], token: CancellationToken | None, cmd: list[str]
    ) -> None:
        if token is None or not token.is_cancelled:
            return
        if process.poll() is None:
            process.kill()
        raise ProcessCancelledError(
            f"Cancelled: {' '.join(cmd)}", command=cmd, returncode=process.wait()
        )


class RealProcessServiceFactory(ProcessServiceFactory):
    """Hands out RealProcessService instances; the workspace is passed per command as cwd."""

    def create(self, workspace: Path) -> ProcessService:
        logger.debug("Creating process service for %s", workspace)
        return RealProcessService()
