"""Command construction for the BeeWare toolchain."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionInfo:
    """Executable plus the leading arguments that select the toolchain.

    The build/run subcommand and target are appended by the caller.
    """

    command: str
    args: list[str]


def _is_script_path(beeware_path: str) -> bool:
    return "/" in beeware_path or "\\" in beeware_path or beeware_path.endswith(".py")


def build_execution_args(python_path: str, beeware_path: str) -> ExecutionInfo:
    """Build the command that invokes the toolchain through the workspace interpreter.

    A beeware_path that looks like a file path is run as a script, anything
    else is treated as a module name and run with -m.

    Args:
        python_path: Interpreter to run the toolchain with
        beeware_path: Toolchain module name (e.g., "briefcase") or script path

    Returns:
        ExecutionInfo with the interpreter as command

    Raises:
        ValueError: If beeware_path is empty

    Example:
        >>> build_execution_args("/venv/bin/python", "briefcase")
        ExecutionInfo(command='/venv/bin/python', args=['-m', 'briefcase'])
        >>> build_execution_args("python", "tools/briefcase.py")
        ExecutionInfo(command='python', args=['tools/briefcase.py'])
    """
    if not beeware_path.strip():
        raise ValueError("beeware_path must not be empty")
    if _is_script_path(beeware_path):
        return ExecutionInfo(command=python_path, args=[beeware_path])
    return ExecutionInfo(command=python_path, args=["-m", beeware_path])
