"""Branch model and related enums"""
from enum import Enum, IntEnum
from dataclasses import dataclass
from typing import Optional, Tuple

class Scope(Enum):
    """Where a branch reference lives."""
    LOCAL = "local"
    REMOTE = "remote"

class Classification(Enum):
    """Integration status of a branch relative to the base branch."""
    MERGED = "merged"
    SQUASHED = "squashed"
    UNPUSHED = "unpushed"
    ACTIVE = "active"

class Outcome(Enum):
    """Result of a single deletion."""
    DELETED = "deleted"
    FAILED = "failed"

class ExitStatus(IntEnum):
    """Process exit status of a run."""
    OK = 0
    DELETION_FAILED = 1
    FATAL = 2

@dataclass(frozen=True)
class Branch:
    """A local or remote-tracking branch."""
    name: str
    scope: Scope
    remote: Optional[str] = None  # Set for remote branches only
    is_base: bool = False

    @property
    def ref(self) -> str:
        """Fully qualified ref name, unambiguous between local and remote namespaces."""
        if self.scope == Scope.REMOTE:
            return f"refs/remotes/{self.remote}/{self.name}"
        return f"refs/heads/{self.name}"

    @property
    def display_name(self) -> str:
        if self.scope == Scope.REMOTE:
            return f"{self.remote}/{self.name}"
        return self.name

@dataclass(frozen=True)
class ClassifiedBranch:
    """A branch tagged with its classification for this run."""
    branch: Branch
    classification: Classification

@dataclass(frozen=True)
class PlanEntry:
    """One (branch, scope) deletion action."""
    branch: Branch
    classification: Classification

    @property
    def name(self) -> str:
        return self.branch.name

    @property
    def scope(self) -> Scope:
        return self.branch.scope

@dataclass(frozen=True)
class DeletionPlan:
    """Ordered deletion actions, consumed once by the executor."""
    entries: Tuple[PlanEntry, ...] = ()

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def keys(self) -> list[tuple[str, Scope]]:
        """(name, scope) pairs in plan order."""
        return [(entry.name, entry.scope) for entry in self.entries]

@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of deleting one plan entry."""
    entry: PlanEntry
    outcome: Outcome
    reason: Optional[str] = None  # None on success

    @property
    def succeeded(self) -> bool:
        return self.outcome == Outcome.DELETED
