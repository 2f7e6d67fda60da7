"""Git-related services for git-clean."""

from .operations import GitOperations
from .branch_queries import BranchQueries
from .merge_detector import MergeDetector
from .squash_detector import SquashDetector

__all__ = [
    "GitOperations",
    "BranchQueries",
    "MergeDetector",
    "SquashDetector",
]
