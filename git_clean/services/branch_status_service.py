"""Service for classifying branches against the base branch"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import AbstractSet, List, Optional

import git

from git_clean.exceptions import ClassificationError
from git_clean.models.branch import Branch, Classification, ClassifiedBranch, Scope
from git_clean.services.git.merge_detector import MergeDetector
from git_clean.services.git.squash_detector import SquashDetector
from git_clean.utils.logging import get_logger
from git_clean.utils.threading import get_optimal_worker_count

logger = get_logger(__name__)


class BranchStatusService:
    """Service for determining each branch's classification."""

    def __init__(
        self,
        merge_detector: MergeDetector,
        squash_detector: Optional[SquashDetector] = None,
        delete_unpushed: bool = False,
    ):
        """Initialize the service.

        Args:
            merge_detector: Ancestor and unpushed checks
            squash_detector: Squash checks; None disables squash detection entirely
            delete_unpushed: Whether local branches missing from the remote count as unpushed
        """
        self.merge_detector = merge_detector
        self.squash_detector = squash_detector
        self.delete_unpushed = delete_unpushed

    def classify(
        self,
        branch: Branch,
        base_branch: str,
        remote_branch_names: Optional[AbstractSet[str]] = None,
    ) -> Classification:
        """Classify one branch.

        Precedence is merged, squashed, unpushed, active. ``remote_branch_names``
        of None means the remote could not be listed and unpushed detection is skipped.

        Raises:
            ClassificationError: if a repository query for this branch fails
        """
        logger.debug(f"Classifying {branch.display_name}")

        if self.merge_detector.is_merged(branch, base_branch):
            return Classification.MERGED

        if self.squash_detector is not None and self.squash_detector.is_squashed(
            branch, base_branch
        ):
            return Classification.SQUASHED

        if (
            self.delete_unpushed
            and branch.scope == Scope.LOCAL
            and remote_branch_names is not None
            and self.merge_detector.is_unpushed(branch, remote_branch_names)
        ):
            logger.debug(f"Branch {branch.name} has no remote counterpart, marking as unpushed")
            return Classification.UNPUSHED

        return Classification.ACTIVE

    def _classify_or_skip(
        self,
        branch: Branch,
        base_branch: str,
        remote_branch_names: Optional[AbstractSet[str]],
    ) -> Optional[ClassifiedBranch]:
        """Classify a branch, turning per-branch failures into a warning and None."""
        try:
            classification = self.classify(branch, base_branch, remote_branch_names)
        except (ClassificationError, git.exc.GitError) as e:
            logger.warning(f"Skipping {branch.display_name}: {e}")
            return None
        return ClassifiedBranch(branch, classification)

    def classify_all(
        self,
        branches: List[Branch],
        base_branch: str,
        remote_branch_names: Optional[AbstractSet[str]] = None,
        sequential: bool = False,
        workers: Optional[int] = None,
    ) -> List[ClassifiedBranch]:
        """Classify branches, in parallel unless ``sequential`` is set.

        Branches that fail to classify are left out of the result. The
        result keeps the input order regardless of completion order.
        """
        if not branches:
            return []

        if sequential or len(branches) == 1:
            results = [
                self._classify_or_skip(branch, base_branch, remote_branch_names)
                for branch in branches
            ]
        else:
            results = self._classify_parallel(branches, base_branch, remote_branch_names, workers)

        classified = [result for result in results if result is not None]
        logger.info(
            f"Classified {len(classified)} of {len(branches)} branches against {base_branch}"
        )
        return classified

    def _classify_parallel(
        self,
        branches: List[Branch],
        base_branch: str,
        remote_branch_names: Optional[AbstractSet[str]],
        workers: Optional[int],
    ) -> List[Optional[ClassifiedBranch]]:
        """Classify branches using ThreadPoolExecutor."""
        max_workers = get_optimal_worker_count(workers, task_count=len(branches))
        logger.debug(f"Using {max_workers} workers for parallel classification")

        results: List[Optional[ClassifiedBranch]] = [None] * len(branches)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(
                    self._classify_or_skip, branch, base_branch, remote_branch_names
                ): index
                for index, branch in enumerate(branches)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    logger.error(f"Error classifying branch {branches[index].display_name}: {e}")

        return results
