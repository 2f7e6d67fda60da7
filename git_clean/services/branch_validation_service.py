"""Repository validation run before any branch is touched."""

from git_clean.exceptions import CurrentBranchInvalidError, InvalidRemoteError
from git_clean.services.git.operations import GitOperations
from git_clean.utils.logging import get_logger

logger = get_logger(__name__)


class BranchValidationService:
    """Service for validating the repository against the run options."""

    @staticmethod
    def validate_base_branch(git_ops: GitOperations, base_branch: str) -> None:
        """
        Check the base branch is the checked-out branch.

        Raises:
            CurrentBranchInvalidError: if another branch is checked out
            DetachedHeadError: if HEAD is detached
        """
        current_branch = git_ops.current_branch()
        if current_branch != base_branch:
            raise CurrentBranchInvalidError(current_branch, base_branch)

    @staticmethod
    def validate_remote(git_ops: GitOperations, remote_name: str) -> None:
        """
        Check the remote exists, by exact name.

        Raises:
            InvalidRemoteError: if no remote has this name
        """
        remotes = git_ops.list_remotes()
        if remote_name not in remotes:
            raise InvalidRemoteError(remote_name, remotes)

    @classmethod
    def validate(cls, git_ops: GitOperations, base_branch: str, remote_name: str) -> None:
        """Run all checks; the first failure raises a ConfigurationError."""
        cls.validate_base_branch(git_ops, base_branch)
        cls.validate_remote(git_ops, remote_name)
        logger.debug(f"Validated base branch {base_branch} and remote {remote_name}")
