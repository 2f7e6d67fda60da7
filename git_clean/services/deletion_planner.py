"""Deletion planning service for git-clean."""

from typing import AbstractSet, Iterable

from git_clean.config import DeleteMode
from git_clean.models.branch import (
    Classification,
    ClassifiedBranch,
    DeletionPlan,
    PlanEntry,
    Scope,
)
from git_clean.utils.logging import get_logger

logger = get_logger(__name__)

_SCOPE_ORDER = {Scope.LOCAL: 0, Scope.REMOTE: 1}


class DeletionPlanner:
    """Service for turning classified branches into a deletion plan."""

    @staticmethod
    def is_deletable(classification: Classification, delete_unpushed: bool) -> bool:
        """
        Check if a classification makes a branch a deletion candidate.

        Args:
            classification: Branch classification
            delete_unpushed: Whether unpushed branches may be deleted

        Returns:
            True for merged and squashed branches, and unpushed ones when enabled
        """
        if classification in (Classification.MERGED, Classification.SQUASHED):
            return True
        return classification == Classification.UNPUSHED and delete_unpushed

    @staticmethod
    def is_ignored(branch_name: str, ignored_branches: AbstractSet[str]) -> bool:
        """Check if a branch is ignored (exact name match)."""
        return branch_name in ignored_branches

    def build_plan(
        self,
        classified: Iterable[ClassifiedBranch],
        ignored_branches: AbstractSet[str],
        delete_mode: DeleteMode,
        delete_unpushed: bool,
    ) -> DeletionPlan:
        """Build the ordered deletion plan.

        A local branch and its same-named remote branch become two
        independent entries. Entries are sorted by name, local first.
        """
        entries = {}
        for item in classified:
            branch = item.branch
            if self.is_ignored(branch.name, ignored_branches):
                logger.debug(f"Ignoring {branch.display_name} (in ignore list)")
                continue
            if not self.is_deletable(item.classification, delete_unpushed):
                continue
            if not delete_mode.includes(branch.scope):
                continue

            key = (branch.name, branch.scope)
            if key not in entries:
                entries[key] = PlanEntry(branch, item.classification)

        ordered = sorted(
            entries.values(), key=lambda entry: (entry.name, _SCOPE_ORDER[entry.scope])
        )
        logger.info(f"Planned {len(ordered)} deletions ({delete_mode.value} mode)")
        return DeletionPlan(tuple(ordered))
