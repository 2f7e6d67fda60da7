"""Display service for classifications, plans and deletion results"""
from collections import Counter
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_clean.config import DeleteMode
from git_clean.constants import CLI_COLORS, PLAN_COLUMNS
from git_clean.formatters import (
    format_classification,
    format_deletion_confirmation_items,
    format_result,
    format_scope,
)
from git_clean.models.branch import (
    Classification,
    ClassifiedBranch,
    DeletionPlan,
    ExecutionResult,
)
from git_clean.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)

class DisplayService:
    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def display_classification_table(self, classified: List[ClassifiedBranch]) -> None:
        """Display every classified branch with its status (verbose mode)."""
        table = Table()
        for col in PLAN_COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for item in sorted(classified, key=lambda c: (c.branch.name, c.branch.scope.value)):
            table.add_row(
                escape(item.branch.display_name),
                format_scope(item.branch.scope),
                format_classification(item.classification),
                style=CLI_COLORS.get(item.classification.value),
            )

        self.console.print(table)

        counts = Counter(item.classification for item in classified)
        self.console.print("\nSummary:")
        self.console.print(f"Total branches: {len(classified)}")
        for classification in Classification:
            self.console.print(
                f"{format_classification(classification).capitalize()} branches: "
                f"{counts.get(classification, 0)}"
            )

    def display_plan(self, plan: DeletionPlan, delete_mode: DeleteMode, dry_run: bool = False) -> None:
        """Display a deletion plan without asking for confirmation."""
        if not plan:
            self.console.print("[green]No branches to delete![/green]")
            return

        if dry_run:
            self.console.print(f"\n[yellow]Dry run: {len(plan)} deletions planned[/yellow]")
        self.console.print(delete_mode.warning_message())
        self.console.print(format_deletion_confirmation_items(plan), markup=False, highlight=False)

    def display_results(self, results: List[ExecutionResult]) -> None:
        """Report every attempted deletion, then a summary line."""
        self.console.print("")
        for result in results:
            color = "green" if result.succeeded else "red"
            self.console.print(format_result(result), style=color, markup=False, highlight=False)

        deleted = sum(1 for result in results if result.succeeded)
        failed = len(results) - deleted
        self.console.print(f"\n[green]Successfully deleted {deleted} branches[/green]")
        if failed:
            self.console.print(f"[red]Failed to delete {failed} branches[/red]")
