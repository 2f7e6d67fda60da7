"""Branch query service for git-clean."""

from typing import List

from git_clean.exceptions import EnumerationError, GitOperationError
from git_clean.models.branch import Branch, Scope
from git_clean.services.git.operations import GitOperations
from git_clean.utils.logging import get_logger

logger = get_logger(__name__)


class BranchQueries:
    """Service for enumerating candidate branches."""

    def __init__(self, git_ops: GitOperations, base_branch: str, remote_name: str):
        """Initialize the branch queries service.

        Args:
            git_ops: GitOperations instance used for all repository access
            base_branch: Branch every candidate is compared against; never listed
            remote_name: Remote whose tracking branches make up the remote scope
        """
        self.git_ops = git_ops
        self.base_branch = base_branch
        self.remote_name = remote_name

    def list_branches(self, scope: Scope) -> List[Branch]:
        """List candidate branches of one scope, excluding the base branch.

        Raises:
            EnumerationError: if the repository query fails
        """
        try:
            if scope == Scope.LOCAL:
                names = self.git_ops.list_local_branches()
                remote = None
            else:
                names = self.git_ops.list_remote_branches(self.remote_name)
                remote = self.remote_name
        except GitOperationError as e:
            raise EnumerationError(scope, e.message or str(e))

        branches = [
            Branch(name, scope, remote=remote, is_base=name == self.base_branch)
            for name in names
        ]
        candidates = [branch for branch in branches if not branch.is_base]
        if len(candidates) != len(branches):
            logger.debug(f"Skipping base branch {self.base_branch} ({scope.value})")

        logger.debug(f"Found {len(candidates)} {scope.value} branches")
        return candidates

    def fetch_remote(self) -> None:
        """Prune-fetch the configured remote so remote-tracking refs are current.

        Raises:
            EnumerationError: if the remote cannot be reached
        """
        logger.info(f"Fetching {self.remote_name}...")
        try:
            self.git_ops.fetch(self.remote_name)
        except GitOperationError as e:
            raise EnumerationError(Scope.REMOTE, e.message or str(e))
