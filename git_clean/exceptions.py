"""Custom exceptions for git-clean"""

from typing import Optional


class GitCleanError(Exception):
    """Base exception for all git-clean errors."""
    pass


class GitOperationError(GitCleanError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ConfigurationError(GitCleanError):
    """Exception raised when the repository does not match the requested options.

    Always fatal: raised before any branch is enumerated or deleted.
    """
    pass


class CurrentBranchInvalidError(ConfigurationError):
    """Exception raised when the checked-out branch is not the base branch."""

    def __init__(self, current_branch: str, base_branch: str):
        self.current_branch = current_branch
        self.base_branch = base_branch
        super().__init__(
            f"Current branch '{current_branch}' is not the base branch '{base_branch}'. "
            f"Check out '{base_branch}' or pass it with --branch."
        )


class InvalidRemoteError(ConfigurationError):
    """Exception raised when the configured remote does not exist."""

    def __init__(self, remote_name: str, remotes: list[str]):
        self.remote_name = remote_name
        self.remotes = remotes
        available = ", ".join(remotes) if remotes else "none"
        super().__init__(
            f"Remote '{remote_name}' is not configured (available remotes: {available})"
        )


class DetachedHeadError(ConfigurationError):
    """Exception raised when repository is in detached HEAD state."""

    def __init__(self):
        super().__init__("Repository is in detached HEAD state")


class EnumerationError(GitCleanError):
    """Exception raised when branches of one scope cannot be listed."""

    def __init__(self, scope, message: Optional[str] = None):
        self.scope = scope
        self.message = message

        error_msg = f"Could not list {scope.value} branches"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ClassificationError(GitCleanError):
    """Exception raised when a single branch cannot be classified."""

    def __init__(self, branch: str, message: Optional[str] = None):
        self.branch = branch
        self.message = message

        error_msg = f"Could not classify branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class DeletionError(GitOperationError):
    """Exception raised when a branch could not be deleted."""

    reason = "error"

    def __init__(self, branch: str, message: Optional[str] = None):
        super().__init__("delete_branch", branch, message)


class BranchNotFoundError(DeletionError):
    """Exception raised when a branch is not found."""

    reason = "not found"

    def __init__(self, branch: str):
        super().__init__(branch, "Branch not found")


class BranchConflictError(DeletionError):
    """Exception raised when a branch is in use elsewhere (e.g. checked out in a worktree)."""

    reason = "conflict"
