"""Build and run commands."""

import logging
import signal

import click

from beetask.cli.ensure import Ensure
from beetask.cli.output import user_output
from beetask.core.context import BeeTaskContext
from beetask.core.process import CancellationToken
from beetask.core.task_provider import (
    BuildRunTaskProvider,
    TaskCancelledError,
    TaskFailedError,
    TaskMode,
)

logger = logging.getLogger(__name__)

# Exit code conventionally used after SIGINT
EXIT_CANCELLED = 130


def _run_task(ctx: BeeTaskContext, mode: TaskMode, target: str) -> None:
    provider = BuildRunTaskProvider(ctx)
    token = CancellationToken()
    # SIGTERM stops the toolchain through the token; Ctrl-C reaches the child directly
    previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: token.cancel())
    try:
        if mode == "build":
            outcome = provider.build(target, token)
        else:
            outcome = provider.run(target, token)
    except (KeyboardInterrupt, TaskCancelledError):
        user_output(click.style("Cancelled", fg="yellow"))
        raise SystemExit(EXIT_CANCELLED) from None
    except TaskFailedError as e:
        Ensure.fail(str(e))
    except ValueError as e:
        # Invalid workspace settings
        Ensure.fail(str(e))
    finally:
        signal.signal(signal.SIGTERM, previous_handler)

    logger.debug("%s %s finished: %s", mode, target, outcome)


@click.command("build")
@click.argument("target")
@click.pass_obj
def build_cmd(ctx: BeeTaskContext, target: str) -> None:
    """Build the application for TARGET (e.g. android, iOS, linux)."""
    _run_task(ctx, "build", target)


@click.command("run")
@click.argument("target")
@click.pass_obj
def run_cmd(ctx: BeeTaskContext, target: str) -> None:
    """Run the application on TARGET (e.g. android, iOS, linux)."""
    _run_task(ctx, "run", target)
