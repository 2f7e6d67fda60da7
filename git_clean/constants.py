"""Shared constants for git-clean."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Columns of the classification table (verbose mode)
PLAN_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 40),
    ColumnDefinition("scope", "Scope", 8),
    ColumnDefinition("status", "Status", 10),
]


# Symbol constants
SYMBOL_DELETED = "✓"
SYMBOL_FAILED = "✗"
SYMBOL_BULLET = "•"


# Classification display names
CLASSIFICATION_DISPLAY = {
    "merged": "merged",
    "squashed": "squashed",
    "unpushed": "unpushed",
    "active": "active",
}


SCOPE_DISPLAY = {
    "local": "local",
    "remote": "remote",
}


# CLI colors (Rich color names) per classification
CLI_COLORS = {
    "merged": "red",  # Will be deleted
    "squashed": "red",
    "unpushed": "yellow",  # Deleted only with --delete-unpushed-branches
    "active": None,  # Default color
}


# Affirmative answers accepted by the confirmation prompt
AFFIRMATIVE_ANSWERS = ("y", "yes")
