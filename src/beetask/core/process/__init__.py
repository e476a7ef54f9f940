"""Streaming process execution."""

from beetask.core.process.abc import ProcessService, ProcessServiceFactory
from beetask.core.process.real import RealProcessService, RealProcessServiceFactory
from beetask.core.process.types import (
    CancellationToken,
    OutputLine,
    OutputSource,
    ProcessCancelledError,
    ProcessExecutionError,
)

__all__ = [
    "CancellationToken",
    "OutputLine",
    "OutputSource",
    "ProcessCancelledError",
    "ProcessExecutionError",
    "ProcessService",
    "ProcessServiceFactory",
    "RealProcessService",
    "RealProcessServiceFactory",
]
