"""Prompt gateway used by the wizard to talk to the user.

The wizard only depends on the PromptGateway protocol. TerminalPromptGateway
implements it with rich prompts and maps cancellation and terminal errors
onto InputAborted and InputFailed.
"""

import logging
from collections.abc import Sequence
from typing import Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from chartwizard.exceptions import InputAborted, InputFailed

logger = logging.getLogger(__name__)


class PromptGateway(Protocol):
    """Interface for asking the user questions.

    Every method blocks until answered and raises InputAborted when the
    user cancels or InputFailed when the answer cannot be read.
    """

    def select_one(self, label: str, options: Sequence[str]) -> int:
        """Return the index of the chosen option."""
        ...

    def ask_text(self, label: str, default: Optional[str] = None) -> str:
        """Return free text, offering default when given."""
        ...

    def ask_masked(self, label: str) -> str:
        """Return secret text without echoing it."""
        ...

    def info(self, message: str) -> None:
        """Show an informational line before a group of prompts."""
        ...


class TerminalPromptGateway:
    """PromptGateway backed by rich prompts on the terminal.

    Example:
        >>> gateway = TerminalPromptGateway()
        >>> idx = gateway.select_one("Deployment Mode", ["OSS", "SaaS"])
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def select_one(self, label: str, options: Sequence[str]) -> int:
        if not options:
            raise InputFailed(f"{label}: no options to choose from")

        self.console.print(f"\n[bold]{escape(label)}:[/bold]")
        for i, option in enumerate(options, 1):
            self.console.print(f"  [cyan]{i}[/cyan]) {escape(option)}")

        choices = [str(i) for i in range(1, len(options) + 1)]
        answer = self._ask(lambda: Prompt.ask("Select", choices=choices, console=self.console), label)
        return int(answer) - 1

    def ask_text(self, label: str, default: Optional[str] = None) -> str:
        if default is None:
            return self._ask(lambda: Prompt.ask(label, console=self.console), label)
        return self._ask(lambda: Prompt.ask(label, default=default, console=self.console), label)

    def ask_masked(self, label: str) -> str:
        return self._ask(lambda: Prompt.ask(label, password=True, console=self.console), label)

    def info(self, message: str) -> None:
        self.console.print(f"[blue]INFO[/blue] {escape(message)}")

    def _ask(self, ask, label: str) -> str:
        try:
            return ask()
        except (KeyboardInterrupt, EOFError) as e:
            raise InputAborted(f"{label}: cancelled by user", original_error=e) from e
        except OSError as e:
            logger.debug(f"Prompt '{label}' failed: {e}")
            raise InputFailed(f"{label}: {e}", original_error=e) from e
