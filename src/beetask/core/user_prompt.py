"""User prompts with mode awareness."""

from abc import ABC, abstractmethod

import click


class UserPrompt(ABC):
    """Asks the user to approve actions the command cannot take on its own.

    Two modes:
    - Interactive: ask on the terminal
    - Assume-yes (--yes): approve without asking
    """

    @abstractmethod
    def confirm_install(self, module_name: str) -> bool:
        """Ask whether a missing module may be installed."""


class InteractivePrompt(UserPrompt):
    """Prompt shown on the terminal; end of input counts as a decline.

    click.confirm reports Ctrl-C and end of input alike as click.Abort, so
    Ctrl-C is told apart by the exception it replaced and re-raised.
    """

    def confirm_install(self, module_name: str) -> bool:
        try:
            return click.confirm(
                f"Module '{module_name}' not installed, would you like to install it?",
                default=False,
                err=True,
            )
        except click.Abort as e:
            if isinstance(e.__context__, KeyboardInterrupt):
                raise KeyboardInterrupt from None
            return False


class AssumeYesPrompt(UserPrompt):
    """Approves every prompt (used with --yes)."""

    def confirm_install(self, module_name: str) -> bool:
        return True
