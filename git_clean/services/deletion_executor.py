"""Executes a confirmed deletion plan"""

from typing import List

import git

from git_clean.exceptions import BranchConflictError, BranchNotFoundError, DeletionError
from git_clean.models.branch import DeletionPlan, ExecutionResult, Outcome, PlanEntry, Scope
from git_clean.services.git.operations import GitOperations, describe_git_error
from git_clean.utils.logging import get_logger

logger = get_logger(__name__)


class DeletionExecutor:
    """Best-effort batch delete: every entry is attempted, failures are recorded."""

    def __init__(self, git_ops: GitOperations):
        self.git_ops = git_ops

    def _failed(self, entry: PlanEntry, reason: str) -> ExecutionResult:
        logger.warning(f"Could not delete {entry.branch.display_name}: {reason}")
        return ExecutionResult(entry, Outcome.FAILED, reason)

    def delete_entry(self, entry: PlanEntry) -> ExecutionResult:
        """Delete one plan entry, capturing failure as a result instead of raising."""
        branch = entry.branch
        try:
            if entry.scope == Scope.LOCAL:
                self.git_ops.delete_local_branch(branch.name)
            else:
                self.git_ops.delete_remote_branch(branch.remote, branch.name)
        except BranchNotFoundError as e:
            return self._failed(entry, e.reason)
        except BranchConflictError as e:
            return self._failed(entry, f"{e.reason}: {e.message}" if e.message else e.reason)
        except DeletionError as e:
            return self._failed(entry, e.message or e.reason)
        except git.exc.GitCommandError as e:
            return self._failed(entry, describe_git_error(e))
        except (git.exc.GitError, OSError) as e:
            # e.g. the repository vanished or could not be opened
            return self._failed(entry, f"{type(e).__name__}: {e}")

        logger.debug(f"Deleted {branch.display_name} ({entry.scope.value})")
        return ExecutionResult(entry, Outcome.DELETED)

    def execute(self, plan: DeletionPlan) -> List[ExecutionResult]:
        """Delete every entry of the plan in order.

        Deletions run one at a time: git ref updates within one repository
        take locks and are not safe to run concurrently.
        """
        results = [self.delete_entry(entry) for entry in plan]
        failed = sum(1 for result in results if not result.succeeded)
        logger.info(f"Deleted {len(results) - failed} branches, {failed} failed")
        return results
