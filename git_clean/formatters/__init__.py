"""Formatting utilities for git-clean.

- status: classification, plan and deletion result formatting
"""

from .status import (
    format_classification,
    format_scope,
    format_plan_entry,
    format_deletion_confirmation_items,
    format_result,
)

__all__ = [
    "format_classification",
    "format_scope",
    "format_plan_entry",
    "format_deletion_confirmation_items",
    "format_result",
]
