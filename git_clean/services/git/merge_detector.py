"""Merge detection service for git-clean."""

from typing import AbstractSet

from git_clean.exceptions import ClassificationError, GitOperationError
from git_clean.models.branch import Branch, Scope
from git_clean.services.git.operations import GitOperations
from git_clean.utils.logging import get_logger

logger = get_logger(__name__)


class MergeDetector:
    """Service for detecting merged and unpushed branches."""

    def __init__(self, git_ops: GitOperations):
        self.git_ops = git_ops

    def is_merged(self, branch: Branch, base_branch: str) -> bool:
        """Check if every commit of the branch is reachable from the base branch.

        A branch pointing at the same commit as the base is merged.

        Raises:
            ClassificationError: if the ancestor query fails
        """
        try:
            merged = self.git_ops.is_ancestor(branch.ref, base_branch)
        except GitOperationError as e:
            raise ClassificationError(branch.display_name, e.message or str(e))

        if merged:
            logger.debug(f"Branch {branch.display_name} is merged into {base_branch}")
        return merged

    @staticmethod
    def is_unpushed(branch: Branch, remote_branch_names: AbstractSet[str]) -> bool:
        """Check if a local branch has no same-named branch on the remote."""
        if branch.scope != Scope.LOCAL:
            return False
        return branch.name not in remote_branch_names
