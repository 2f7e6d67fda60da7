"""Core functionality for git-clean"""

from typing import Callable, List, Optional, Set, Tuple

import git
from rich.console import Console
from rich.markup import escape

from git_clean.config import Options
from git_clean.exceptions import ConfigurationError, EnumerationError
from git_clean.models.branch import (
    Branch,
    ClassifiedBranch,
    DeletionPlan,
    ExecutionResult,
    ExitStatus,
    Scope,
)
from git_clean.services.branch_status_service import BranchStatusService
from git_clean.services.branch_validation_service import BranchValidationService
from git_clean.services.confirmation_service import ConfirmationGate
from git_clean.services.deletion_executor import DeletionExecutor
from git_clean.services.deletion_planner import DeletionPlanner
from git_clean.services.display_service import DisplayService
from git_clean.services.git import BranchQueries, GitOperations, MergeDetector, SquashDetector
from git_clean.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


class BranchCleaner:
    """Runs one validate, enumerate, classify, plan, confirm, execute, report cycle."""

    def __init__(
        self,
        repo_path: str,
        options: Options,
        input_func: Optional[Callable[[str], str]] = None,
        git_ops: Optional[GitOperations] = None,
        output: Optional[Console] = None,
    ):
        """Initialize BranchCleaner.

        Args:
            repo_path: Path to git repository
            options: Validated run options
            input_func: Answers the confirmation prompt; defaults to the terminal
            git_ops: Repository adapter; built from repo_path when omitted
            output: Console for user-facing output

        Raises:
            ConfigurationError: if repo_path is not a git repository
        """
        self.repo_path = repo_path
        self.options = options
        self.console = output or console

        if git_ops is None:
            try:
                git.Repo(repo_path)
            except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
                raise ConfigurationError(f"Not a git repository: {repo_path}")
            git_ops = GitOperations(repo_path)
        self.git_ops = git_ops

        # Each service gets only the settings it needs
        self.branch_queries = BranchQueries(git_ops, options.base_branch, options.remote_name)
        self.merge_detector = MergeDetector(git_ops)
        self.squash_detector = SquashDetector(git_ops) if options.check_squashes else None
        self.branch_status_service = BranchStatusService(
            self.merge_detector, self.squash_detector, delete_unpushed=options.delete_unpushed
        )
        self.planner = DeletionPlanner()
        self.confirmation_gate = ConfirmationGate(input_func, output=self.console)
        self.executor = DeletionExecutor(git_ops)
        self.display_service = DisplayService(output=self.console)

    def validate(self) -> None:
        """Check the repository state before anything else is queried."""
        BranchValidationService.validate(
            self.git_ops, self.options.base_branch, self.options.remote_name
        )

    def enumerate_branches(self) -> Tuple[List[Branch], Optional[Set[str]]]:
        """List candidate branches for the requested scopes.

        Returns:
            (candidates, remote branch names). The remote names are None when
            the remote could not be listed, which disables unpushed detection.

        Raises:
            EnumerationError: if every requested scope failed to list
        """
        delete_mode = self.options.delete_mode
        requested = [scope for scope in Scope if delete_mode.includes(scope)]
        needs_remote = delete_mode.includes(Scope.REMOTE) or self.options.delete_unpushed

        errors: List[EnumerationError] = []
        remote_error: Optional[EnumerationError] = None
        local_branches: List[Branch] = []
        remote_branches: List[Branch] = []
        remote_names: Optional[Set[str]] = None

        if needs_remote and self.options.fetch:
            try:
                self.branch_queries.fetch_remote()
            except EnumerationError as e:
                remote_error = e

        if delete_mode.includes(Scope.LOCAL):
            try:
                local_branches = self.branch_queries.list_branches(Scope.LOCAL)
            except EnumerationError as e:
                errors.append(e)

        if needs_remote and remote_error is None:
            try:
                remote_branches = self.branch_queries.list_branches(Scope.REMOTE)
                remote_names = {branch.name for branch in remote_branches}
            except EnumerationError as e:
                remote_error = e

        if remote_error is not None:
            if delete_mode.includes(Scope.REMOTE):
                errors.append(remote_error)
            else:
                logger.warning(f"{remote_error}; unpushed branches will not be detected")

        failed_scopes = {error.scope for error in errors}
        if failed_scopes.issuperset(requested):
            raise errors[0]
        for error in errors:
            logger.warning(f"{error}; continuing with the remaining branches")
            self.console.print(f"[yellow]Warning: {escape(str(error))}[/yellow]")

        candidates = list(local_branches)
        if delete_mode.includes(Scope.REMOTE):
            candidates.extend(remote_branches)
        return candidates, remote_names

    def classify(
        self, candidates: List[Branch], remote_names: Optional[Set[str]]
    ) -> List[ClassifiedBranch]:
        return self.branch_status_service.classify_all(
            candidates,
            self.options.base_branch,
            remote_names,
            # Debug forces sequential processing for readable logs
            sequential=self.options.sequential or self.options.debug,
            workers=self.options.workers,
        )

    def build_plan(self, classified: List[ClassifiedBranch]) -> DeletionPlan:
        return self.planner.build_plan(
            classified,
            self.options.ignored_branches,
            self.options.delete_mode,
            self.options.delete_unpushed,
        )

    def confirm(self, plan: DeletionPlan) -> bool:
        return self.confirmation_gate.confirm(
            plan, self.options.delete_mode, self.options.skip_confirmation
        )

    def execute(self, plan: DeletionPlan) -> List[ExecutionResult]:
        return self.executor.execute(plan)

    def run(self) -> ExitStatus:
        """Run the whole cleanup and report the outcome."""
        try:
            self.validate()
            candidates, remote_names = self.enumerate_branches()
        except (ConfigurationError, EnumerationError) as e:
            logger.debug(f"Aborting: {e}")
            self.console.print(f"[red]Error: {escape(str(e))}[/red]")
            return ExitStatus.FATAL

        classified = self.classify(candidates, remote_names)
        if self.options.verbose or self.options.debug:
            self.display_service.display_classification_table(classified)

        plan = self.build_plan(classified)
        if not plan:
            self.display_service.display_plan(plan, self.options.delete_mode)
            return ExitStatus.OK

        if self.options.dry_run:
            self.display_service.display_plan(plan, self.options.delete_mode, dry_run=True)
            return ExitStatus.OK

        if not self.confirm(plan):
            self.console.print("[yellow]Deletion cancelled[/yellow]")
            return ExitStatus.OK

        results = self.execute(plan)
        self.display_service.display_results(results)

        if any(not result.succeeded for result in results):
            return ExitStatus.DELETION_FAILED
        return ExitStatus.OK


def run(
    options: Options,
    repo_path: str = ".",
    input_func: Optional[Callable[[str], str]] = None,
) -> ExitStatus:
    """Entry point for callers: clean branches of the repository at repo_path."""
    try:
        cleaner = BranchCleaner(repo_path, options, input_func=input_func)
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return ExitStatus.FATAL
    return cleaner.run()
