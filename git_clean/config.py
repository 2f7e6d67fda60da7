"""Configuration handling for git-clean"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from git_clean.models.branch import Scope


class DeleteMode(Enum):
    """Which branch scopes a run deletes from."""

    LOCAL = "local"
    REMOTE = "remote"
    BOTH = "both"

    @classmethod
    def from_flags(cls, locals_only: bool = False, remotes_only: bool = False) -> "DeleteMode":
        """Resolve the mode from the --locals/--remotes flags (neither means both)."""
        if locals_only:
            return cls.LOCAL
        if remotes_only:
            return cls.REMOTE
        return cls.BOTH

    def includes(self, scope: Scope) -> bool:
        """Check whether branches of the given scope are deleted in this mode."""
        if self == DeleteMode.BOTH:
            return True
        return self.value == scope.value

    def warning_message(self) -> str:
        source = {
            DeleteMode.LOCAL: "locally:",
            DeleteMode.REMOTE: "remotely:",
            DeleteMode.BOTH: "locally and remotely:",
        }[self]
        return f"The following branches will be deleted {source}"


@dataclass(frozen=True)
class Options:
    """Run configuration, resolved once at startup and never mutated."""

    # Repository targets
    remote_name: str = "origin"
    base_branch: str = "main"

    # Deletion selection
    delete_mode: DeleteMode = DeleteMode.BOTH
    check_squashes: bool = False
    delete_unpushed: bool = False
    ignored_branches: FrozenSet[str] = field(default_factory=frozenset)

    # Execution modes
    skip_confirmation: bool = False
    dry_run: bool = False
    fetch: bool = False  # Prune-fetch the remote before enumerating
    verbose: bool = False
    debug: bool = False
    sequential: bool = False  # Force sequential classification
    workers: Optional[int] = None  # Number of parallel workers (None = auto-detect)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_base_branch()
        self._validate_remote_name()
        self._validate_delete_mode()
        self._validate_workers()
        # Accept any iterable of names, store an immutable set
        object.__setattr__(self, "ignored_branches", frozenset(self.ignored_branches))

    def _validate_base_branch(self):
        """Validate base_branch is not empty."""
        if not self.base_branch or not self.base_branch.strip():
            raise ValueError("base_branch cannot be empty")
        object.__setattr__(self, "base_branch", self.base_branch.strip())

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        object.__setattr__(self, "remote_name", self.remote_name.strip())

    def _validate_delete_mode(self):
        """Validate delete_mode is a DeleteMode (or its value)."""
        if not isinstance(self.delete_mode, DeleteMode):
            try:
                object.__setattr__(self, "delete_mode", DeleteMode(self.delete_mode))
            except ValueError:
                allowed = [mode.value for mode in DeleteMode]
                raise ValueError(
                    f"delete_mode must be one of {allowed}, got '{self.delete_mode}'"
                )

    def _validate_workers(self):
        """Validate workers is positive when given."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    def to_dict(self) -> dict:
        """Convert options to a plain dictionary (for debug output)."""
        return {
            "remote_name": self.remote_name,
            "base_branch": self.base_branch,
            "delete_mode": self.delete_mode.value,
            "check_squashes": self.check_squashes,
            "delete_unpushed": self.delete_unpushed,
            "ignored_branches": sorted(self.ignored_branches),
            "skip_confirmation": self.skip_confirmation,
            "dry_run": self.dry_run,
            "fetch": self.fetch,
            "verbose": self.verbose,
            "debug": self.debug,
            "sequential": self.sequential,
            "workers": self.workers,
        }

    @classmethod
    def from_dict(cls, options_dict: dict) -> "Options":
        """Create Options from dictionary, ignoring unknown keys."""
        known_fields = {
            "remote_name",
            "base_branch",
            "delete_mode",
            "check_squashes",
            "delete_unpushed",
            "ignored_branches",
            "skip_confirmation",
            "dry_run",
            "fetch",
            "verbose",
            "debug",
            "sequential",
            "workers",
        }

        filtered = {k: v for k, v in options_dict.items() if k in known_fields}
        return cls(**filtered)


def build_ignored(names: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Normalize ignore list input (strips blanks and whitespace)."""
    if not names:
        return frozenset()
    return frozenset(name.strip() for name in names if name and name.strip())
