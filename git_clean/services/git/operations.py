"""Git operations service"""

import os
import tempfile
from threading import Lock
from typing import Dict, List, Optional

import git

from git_clean.exceptions import (
    BranchConflictError,
    BranchNotFoundError,
    DeletionError,
    DetachedHeadError,
    GitOperationError,
)
from git_clean.utils.logging import get_logger

logger = get_logger(__name__)

# Fixed identity for the throwaway commits built during squash detection,
# so detection works in repositories without user.name/user.email configured.
_SQUASH_COMMIT_IDENTITY = {
    "GIT_AUTHOR_NAME": "git-clean",
    "GIT_AUTHOR_EMAIL": "git-clean@localhost",
    "GIT_COMMITTER_NAME": "git-clean",
    "GIT_COMMITTER_EMAIL": "git-clean@localhost",
}


def describe_git_error(error: git.exc.GitCommandError) -> str:
    """Build a readable message from a GitCommandError."""
    stderr = (getattr(error, "stderr", "") or "").strip()
    # GitPython wraps stderr as "stderr: '...'"
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'").strip()
    if stderr:
        return stderr
    status = getattr(error, "status", "unknown")
    return f"git exited with code {status}"


class GitOperations:
    """Service for Git operations.

    Every method opens its own ``git.Repo`` so the service can be shared by
    the classification worker pool.
    """

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Path to the git repository (string path, not repo object)
        """
        self.repo_path = repo_path
        self._merge_base_cache: Dict[str, Optional[str]] = {}
        self._cache_lock = Lock()

        logger.debug("Git operations initialized")

    def _get_repo(self):
        """Get a thread-safe git.Repo instance.

        GitPython repos are lightweight - they don't clone, just open the existing repo.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    def _check_cache(self, key: str) -> tuple[bool, Optional[str]]:
        """Thread-safe cache check. Returns (found, value)."""
        with self._cache_lock:
            if key in self._merge_base_cache:
                return (True, self._merge_base_cache[key])
            return (False, None)

    def _set_in_cache(self, key: str, value: Optional[str]):
        """Thread-safe cache write."""
        with self._cache_lock:
            self._merge_base_cache[key] = value

    def current_branch(self) -> str:
        """Name of the checked-out branch."""
        repo = self._get_repo()
        try:
            return repo.active_branch.name
        except TypeError:
            raise DetachedHeadError()

    def list_remotes(self) -> List[str]:
        """Names of the configured remotes."""
        repo = self._get_repo()
        return [remote.name for remote in repo.remotes]

    def list_local_branches(self, excluding: Optional[str] = None) -> List[str]:
        """List local branch names, optionally leaving one out."""
        prefix = "refs/heads/"
        try:
            repo = self._get_repo()
            output = repo.git.for_each_ref("--format=%(refname)", "refs/heads")
        except git.exc.GitCommandError as e:
            raise GitOperationError("list_local_branches", message=describe_git_error(e))

        names = [
            line[len(prefix):]
            for line in output.splitlines()
            if line.startswith(prefix)
        ]
        return [name for name in names if name != excluding]

    def list_remote_branches(self, remote: str, excluding: Optional[str] = None) -> List[str]:
        """List remote-tracking branch names of a remote, without the remote prefix.

        Symbolic refs such as ``<remote>/HEAD`` are skipped.
        """
        prefix = f"refs/remotes/{remote}/"
        try:
            repo = self._get_repo()
            output = repo.git.for_each_ref(
                "--format=%(refname) %(symref)", f"refs/remotes/{remote}"
            )
        except git.exc.GitCommandError as e:
            raise GitOperationError("list_remote_branches", message=describe_git_error(e))

        names = []
        for line in output.splitlines():
            refname, _, symref = line.partition(" ")
            if symref.strip():
                logger.debug(f"Skipping symbolic ref {refname} -> {symref.strip()}")
                continue
            if not refname.startswith(prefix):
                continue
            names.append(refname[len(prefix):])
        return [name for name in names if name != excluding]

    def fetch(self, remote: str) -> None:
        """Fetch a remote, pruning remote-tracking branches deleted upstream."""
        try:
            repo = self._get_repo()
            repo.remote(remote).fetch(prune=True)
        except (git.exc.GitCommandError, ValueError) as e:
            message = describe_git_error(e) if isinstance(e, git.exc.GitCommandError) else str(e)
            raise GitOperationError("fetch", message=message)

    def is_ancestor(self, branch_ref: str, base: str) -> bool:
        """Check whether every commit of branch_ref is reachable from base."""
        try:
            repo = self._get_repo()
            return repo.is_ancestor(branch_ref, base)
        except git.exc.GitCommandError as e:
            raise GitOperationError("is_ancestor", branch_ref, describe_git_error(e))

    def merge_base(self, branch_ref: str, base: str) -> Optional[str]:
        """Nearest common ancestor of branch_ref and base, or None for unrelated histories."""
        cache_key = f"{branch_ref}:{base}"
        found, value = self._check_cache(cache_key)
        if found:
            return value

        try:
            repo = self._get_repo()
            sha = repo.git.merge_base(branch_ref, base).strip() or None
        except git.exc.GitCommandError as e:
            # Exit status 1 means there is no common ancestor; bad refs exit 128
            if e.status == 1:
                sha = None
            else:
                raise GitOperationError("merge_base", branch_ref, describe_git_error(e))

        self._set_in_cache(cache_key, sha)
        return sha

    def diff_is_empty(self, from_ref: str, to_ref: str, onto: Optional[str] = None) -> bool:
        """Check whether the changes from_ref..to_ref amount to nothing.

        Without ``onto`` this compares the two trees directly. With ``onto``
        it asks whether replaying those changes on top of ``onto`` would
        change anything. A commit in ``onto`` with the same patch-id answers
        quickly; otherwise every changed path is three-way merged into
        ``onto`` (from_ref as base) and compared with ``onto``'s content.

        Refs, the index and the work tree are never modified. The patch-id
        check does write one unreferenced scratch commit to the object
        database per call; ``git gc`` prunes it.
        """
        try:
            repo = self._get_repo()
            changed = repo.git.diff("--name-only", from_ref, to_ref)
            if not changed.strip():
                return True
            if onto is None:
                return False
            if self._has_equivalent_patch(repo, from_ref, to_ref, onto):
                return True
            return self.merge_is_noop(from_ref, to_ref, onto)
        except git.exc.GitCommandError as e:
            raise GitOperationError("diff", to_ref, describe_git_error(e))

    def _has_equivalent_patch(self, repo, from_ref: str, to_ref: str, onto: str) -> bool:
        """Check ``git cherry`` for a commit in onto matching from_ref..to_ref as one patch."""
        squashed = repo.git.commit_tree(
            f"{to_ref}^{{tree}}", "-p", from_ref, "-m", "git-clean squash check",
            env=_SQUASH_COMMIT_IDENTITY,
        ).strip()
        cherry = repo.git.cherry(onto, squashed).strip()
        logger.debug(f"cherry {onto} {squashed[:7]} ({to_ref}): {cherry or '<empty>'}")
        return cherry.startswith("-")

    def merge_is_noop(self, from_ref: str, to_ref: str, onto: str) -> bool:
        """Check whether merging to_ref into onto, with from_ref as merge base, changes nothing.

        Catches squash merges whose patch differs from the branch's, such as
        base edits near the branch's lines or several branches squashed
        into one commit. A conflict, or a path deleted on only one side,
        means the branch still carries changes.

        Raises:
            GitOperationError: if a ref cannot be resolved
        """
        try:
            repo = self._get_repo()
            paths = [
                path
                for path in repo.git.diff("--name-only", "--no-renames", "-z", from_ref, to_ref).split("\0")
                if path
            ]
            trees = [repo.commit(ref).tree for ref in (onto, from_ref, to_ref)]
        except git.exc.GitCommandError as e:
            raise GitOperationError("merge", to_ref, describe_git_error(e))
        except (git.exc.BadName, ValueError) as e:
            raise GitOperationError("merge", to_ref, str(e))

        with tempfile.TemporaryDirectory(prefix="git-clean-") as tmpdir:
            for path in paths:
                ours, base, theirs = (_blob_at(tree, path) for tree in trees)
                if _same_blob(ours, theirs):
                    continue
                if ours is None or theirs is None:
                    logger.debug(f"{path}: deleted on one side only ({to_ref} onto {onto})")
                    return False

                files = []
                for name, blob in (("ours", ours), ("base", base), ("theirs", theirs)):
                    file_path = os.path.join(tmpdir, name)
                    with open(file_path, "wb") as f:
                        if blob is not None:
                            f.write(blob.data_stream.read())
                    files.append(file_path)

                try:
                    merged = repo.git.merge_file(
                        "-p", *files, stdout_as_string=False, strip_newline_in_stdout=False
                    )
                except git.exc.GitCommandError as e:
                    # Exit status is the number of conflicts
                    logger.debug(f"{path}: merge conflicts ({e.status})")
                    return False

                with open(files[0], "rb") as f:
                    if merged != f.read():
                        logger.debug(f"{path}: {to_ref} still changes {onto}")
                        return False

        return True

    def delete_local_branch(self, name: str) -> None:
        """Delete a local branch (``git branch -D``)."""
        repo = self._get_repo()
        if name not in [head.name for head in repo.heads]:
            raise BranchNotFoundError(name)

        try:
            repo.git.branch("-D", name)
        except git.exc.GitCommandError as e:
            message = describe_git_error(e)
            lowered = message.lower()
            if "not found" in lowered:
                raise BranchNotFoundError(name)
            if "checked out" in lowered or "used by worktree" in lowered:
                raise BranchConflictError(name, message)
            raise DeletionError(name, message)

        logger.info(f"Deleted local branch {name}")

    def delete_remote_branch(self, remote: str, name: str) -> None:
        """Delete a branch on a remote (``git push <remote> --delete <name>``)."""
        try:
            repo = self._get_repo()
            repo.git.push(remote, "--delete", name)
        except git.exc.GitCommandError as e:
            message = describe_git_error(e)
            lowered = message.lower()
            if "remote ref does not exist" in lowered:
                raise BranchNotFoundError(name)
            if "protected" in lowered or "prohibited" in lowered:
                raise BranchConflictError(name, message)
            raise DeletionError(name, message)

        logger.info(f"Deleted remote branch {remote}/{name}")


def _blob_at(tree, path: str):
    """Blob at path in tree, or None when the path does not exist there."""
    try:
        return tree / path
    except KeyError:
        return None


def _same_blob(left, right) -> bool:
    if left is None or right is None:
        return left is right
    return left.hexsha == right.hexsha
