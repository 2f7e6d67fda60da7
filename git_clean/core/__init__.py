"""Branch cleanup engine for git-clean."""

from .branch_cleaner import BranchCleaner, run

__all__ = ["BranchCleaner", "run"]
