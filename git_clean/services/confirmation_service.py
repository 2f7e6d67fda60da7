"""Confirmation prompt shown before deleting branches"""

from typing import Callable, Optional

from rich.console import Console

from git_clean.config import DeleteMode
from git_clean.constants import AFFIRMATIVE_ANSWERS
from git_clean.formatters import format_deletion_confirmation_items
from git_clean.models.branch import DeletionPlan
from git_clean.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)

PROMPT = "\nProceed with deletion? [y/N] "


class ConfirmationGate:
    """Single suspension point asking the user to approve a deletion plan."""

    def __init__(
        self,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[Console] = None,
    ):
        """Initialize the gate.

        Args:
            input_func: Reads one answer given a prompt; defaults to the console's input
            output: Console the plan is rendered to
        """
        self.output = output or console
        self.input_func = input_func or self._read_answer

    def _read_answer(self, prompt: str) -> str:
        # "[y/N]" is not rich markup
        return self.output.input(prompt, markup=False)

    @staticmethod
    def is_affirmative(response: str) -> bool:
        return response.strip().lower() in AFFIRMATIVE_ANSWERS

    def confirm(self, plan: DeletionPlan, delete_mode: DeleteMode, skip_confirmation: bool) -> bool:
        """Show the plan and ask for approval.

        Returns:
            True to proceed. Anything but an explicit yes (including EOF or
            Ctrl-C at the prompt) is a refusal.
        """
        if skip_confirmation:
            logger.debug("Confirmation skipped")
            return True
        if not plan:
            return True

        self.output.print(f"\n{delete_mode.warning_message()}")
        self.output.print(format_deletion_confirmation_items(plan), markup=False, highlight=False)

        try:
            response = self.input_func(PROMPT)
        except (EOFError, KeyboardInterrupt):
            self.output.print()
            logger.info("No answer at confirmation prompt, treating as refusal")
            return False

        approved = self.is_affirmative(response or "")
        logger.debug(f"Confirmation answer {response!r} -> {'approved' if approved else 'refused'}")
        return approved
