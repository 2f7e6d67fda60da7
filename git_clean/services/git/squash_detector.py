"""Squash merge detection service for git-clean."""

from git_clean.exceptions import ClassificationError, GitOperationError
from git_clean.models.branch import Branch
from git_clean.services.git.operations import GitOperations
from git_clean.utils.logging import get_logger

logger = get_logger(__name__)


class SquashDetector:
    """Service for detecting branches whose changes already landed in the base.

    This is the most expensive check (one diff per branch plus a patch-id
    comparison against the base history), so it only runs when requested
    and only for branches that are not already merged.
    """

    def __init__(self, git_ops: GitOperations):
        self.git_ops = git_ops

    def is_squashed(self, branch: Branch, base_branch: str) -> bool:
        """Check if replaying the branch onto the base would change nothing.

        The branch's contribution is the diff from its merge-base with the
        base branch to its tip. If the base already contains an equivalent
        change (typically a squash merge), that diff is empty once applied
        on top of the base tip.

        Raises:
            ClassificationError: if a merge-base or diff query fails
        """
        try:
            merge_base = self.git_ops.merge_base(branch.ref, base_branch)
            if merge_base is None:
                logger.debug(f"{branch.display_name} shares no history with {base_branch}")
                return False

            squashed = self.git_ops.diff_is_empty(merge_base, branch.ref, onto=base_branch)
        except GitOperationError as e:
            raise ClassificationError(branch.display_name, e.message or str(e))

        if squashed:
            logger.debug(
                f"Branch {branch.display_name} is squash-merged into {base_branch} "
                f"(merge-base {merge_base[:7]})"
            )
        return squashed
