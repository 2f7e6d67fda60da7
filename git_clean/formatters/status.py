"""Status and deletion formatting utilities."""

from git_clean.constants import (
    CLASSIFICATION_DISPLAY,
    SCOPE_DISPLAY,
    SYMBOL_BULLET,
    SYMBOL_DELETED,
    SYMBOL_FAILED,
)
from git_clean.models.branch import (
    Classification,
    DeletionPlan,
    ExecutionResult,
    PlanEntry,
    Scope,
)


def format_classification(classification: Classification) -> str:
    """
    Format a classification as display text.

    Args:
        classification: Classification enum value

    Returns:
        Display text for the classification
    """
    return CLASSIFICATION_DISPLAY.get(classification.value, classification.value)


def format_scope(scope: Scope) -> str:
    """Format a scope as display text."""
    return SCOPE_DISPLAY.get(scope.value, scope.value)


def format_plan_entry(entry: PlanEntry) -> str:
    """
    Format one plan entry as a bullet line.

    Example:
        "  • feature/old (merged, local)"
    """
    reason = format_classification(entry.classification)
    return f"  {SYMBOL_BULLET} {entry.branch.display_name} ({reason}, {format_scope(entry.scope)})"


def format_deletion_confirmation_items(plan: DeletionPlan) -> str:
    """
    Format a deletion plan for the confirmation message, one entry per line.

    Example:
        "  • feature/old (merged, local)\\n  • origin/feature/old (merged, remote)"
    """
    return "\n".join(format_plan_entry(entry) for entry in plan)


def format_result(result: ExecutionResult) -> str:
    """
    Format the outcome of one deletion.

    Example:
        "✓ Deleted feature/old (local)"
        "✗ Failed to delete origin/feature/x (remote): not found"
    """
    entry = result.entry
    where = f"{entry.branch.display_name} ({format_scope(entry.scope)})"
    if result.succeeded:
        return f"{SYMBOL_DELETED} Deleted {where}"
    return f"{SYMBOL_FAILED} Failed to delete {where}: {result.reason or 'unknown error'}"
