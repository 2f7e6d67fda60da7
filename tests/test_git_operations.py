"""Tests for GitOperations"""
import pytest
import git

from git_clean.exceptions import (
    BranchConflictError,
    BranchNotFoundError,
    DetachedHeadError,
    EnumerationError,
    GitOperationError,
)
from git_clean.models.branch import Branch, Scope
from git_clean.services.git import BranchQueries, GitOperations

EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class TestGitOperationsQueries:
    """Test read-only repository queries."""

    def test_current_branch(self, git_repo):
        """Test reading the checked-out branch."""
        git_ops = GitOperations(git_repo.working_dir)
        assert git_ops.current_branch() == "main"

    def test_current_branch_detached_head(self, git_repo):
        """Test detached HEAD raises instead of returning a name."""
        git_repo.git.checkout(git_repo.head.commit.hexsha)
        git_ops = GitOperations(git_repo.working_dir)

        with pytest.raises(DetachedHeadError):
            git_ops.current_branch()

    def test_list_remotes(self, git_repo):
        """Test listing configured remotes."""
        git_ops = GitOperations(git_repo.working_dir)
        assert git_ops.list_remotes() == ["origin"]

    def test_list_local_branches_excludes_base(self, git_repo_with_branches):
        """Test the base branch is left out of the local listing."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        branches = git_ops.list_local_branches(excluding="main")

        assert sorted(branches) == ["feature-a", "feature-b", "feature-c", "feature-d"]

    def test_list_local_branches_with_slashes(self, git_repo):
        """Test branch names containing slashes are kept whole."""
        git_repo.git.branch("feature/nested/name")
        git_ops = GitOperations(git_repo.working_dir)

        assert "feature/nested/name" in git_ops.list_local_branches(excluding="main")

    def test_list_remote_branches(self, git_repo_with_branches):
        """Test listing remote-tracking branches without the remote prefix."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        branches = git_ops.list_remote_branches("origin", excluding="main")

        assert sorted(branches) == ["feature-a", "feature-b", "feature-c"]

    def test_list_remote_branches_skips_symbolic_head(self, git_repo_with_branches):
        """Test origin/HEAD is never listed as a branch."""
        git_repo_with_branches.git.symbolic_ref(
            "refs/remotes/origin/HEAD", "refs/remotes/origin/main"
        )
        git_ops = GitOperations(git_repo_with_branches.working_dir)

        branches = git_ops.list_remote_branches("origin")
        assert "HEAD" not in branches
        assert "main" in branches

    def test_list_remote_branches_unknown_remote(self, git_repo):
        """Test an unknown remote simply has no branches."""
        git_ops = GitOperations(git_repo.working_dir)
        assert git_ops.list_remote_branches("upstream") == []


class TestGitOperationsAncestry:
    """Test ancestor, merge-base and diff queries."""

    def test_is_ancestor_merged_branch(self, git_repo_with_branches):
        """Test a merged branch is an ancestor of main."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        assert git_ops.is_ancestor("refs/heads/feature-a", "main") is True

    def test_is_ancestor_diverged_branch(self, git_repo_with_branches):
        """Test a diverged branch is not an ancestor of main."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        assert git_ops.is_ancestor("refs/heads/feature-b", "main") is False

    def test_is_ancestor_unknown_ref(self, git_repo):
        """Test an unknown ref raises GitOperationError."""
        git_ops = GitOperations(git_repo.working_dir)
        with pytest.raises(GitOperationError):
            git_ops.is_ancestor("refs/heads/does-not-exist", "main")

    def test_merge_base_is_cached(self, git_repo_with_branches):
        """Test merge-base lookups are cached per (ref, base)."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        first = git_ops.merge_base("refs/heads/feature-b", "main")

        assert first is not None
        assert "refs/heads/feature-b:main" in git_ops._merge_base_cache
        assert git_ops.merge_base("refs/heads/feature-b", "main") == first

    def test_merge_base_unrelated_history(self, git_repo):
        """Test branches without a common ancestor have no merge-base."""
        # Root commit with git's well-known empty tree
        root = git_repo.git.commit_tree(EMPTY_TREE_SHA, "-m", "Unrelated root")
        git_repo.git.branch("unrelated", root)
        git_ops = GitOperations(git_repo.working_dir)

        assert git_ops.merge_base("refs/heads/unrelated", "main") is None

    def test_diff_is_empty_same_tree(self, git_repo):
        """Test identical trees have an empty diff."""
        git_ops = GitOperations(git_repo.working_dir)
        head = git_repo.head.commit.hexsha
        assert git_ops.diff_is_empty(head, "main") is True

    def test_diff_is_empty_onto_squashed_base(self, git_repo_with_branches):
        """Test a squash-merged branch replays to nothing on main."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        merge_base = git_ops.merge_base("refs/heads/feature-c", "main")

        assert git_ops.diff_is_empty(merge_base, "refs/heads/feature-c", onto="main") is True

    def test_diff_is_not_empty_for_unmerged_work(self, git_repo_with_branches):
        """Test a branch with unmerged work still changes main."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        merge_base = git_ops.merge_base("refs/heads/feature-b", "main")

        assert git_ops.diff_is_empty(merge_base, "refs/heads/feature-b") is False
        assert git_ops.diff_is_empty(merge_base, "refs/heads/feature-b", onto="main") is False

    def test_merge_is_noop_for_squashed_branch(self, git_repo_with_branches):
        """Test merging a squash-merged branch into main changes nothing."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        merge_base = git_ops.merge_base("refs/heads/feature-c", "main")

        assert git_ops.merge_is_noop(merge_base, "refs/heads/feature-c", "main") is True

    def test_merge_is_not_noop_for_new_work(self, git_repo_with_branches):
        """Test merging a branch with new files changes main."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        merge_base = git_ops.merge_base("refs/heads/feature-b", "main")

        assert git_ops.merge_is_noop(merge_base, "refs/heads/feature-b", "main") is False

    def test_merge_is_not_noop_for_deleted_file(self, git_repo):
        """Test a branch deleting a file main still has is not a no-op."""
        base = git_repo.head.commit.hexsha
        git_repo.git.checkout("-b", "drop-readme")
        git_repo.git.rm("README.md")
        git_repo.git.commit("-m", "Drop README")
        git_repo.git.checkout("main")
        git_ops = GitOperations(git_repo.working_dir)

        assert git_ops.merge_is_noop(base, "refs/heads/drop-readme", "main") is False

    def test_merge_is_noop_unknown_ref(self, git_repo):
        """Test an unknown ref raises GitOperationError."""
        git_ops = GitOperations(git_repo.working_dir)
        with pytest.raises(GitOperationError):
            git_ops.merge_is_noop("main", "refs/heads/does-not-exist", "main")


class TestGitOperationsDeletion:
    """Test local and remote deletion."""

    def test_delete_local_branch(self, git_repo_with_branches):
        """Test deleting a local branch, even when it is not merged."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        git_ops.delete_local_branch("feature-b")

        assert "feature-b" not in [head.name for head in git_repo_with_branches.heads]

    def test_delete_local_branch_not_found(self, git_repo):
        """Test deleting a missing local branch."""
        git_ops = GitOperations(git_repo.working_dir)
        with pytest.raises(BranchNotFoundError):
            git_ops.delete_local_branch("ghost")

    def test_delete_local_branch_in_worktree(self, git_repo_with_branches, temp_dir):
        """Test a branch checked out in another worktree cannot be deleted."""
        git_repo_with_branches.git.worktree("add", str(temp_dir / "wt"), "feature-a")
        git_ops = GitOperations(git_repo_with_branches.working_dir)

        with pytest.raises(BranchConflictError):
            git_ops.delete_local_branch("feature-a")

    def test_delete_remote_branch(self, git_repo_with_branches):
        """Test deleting a branch on the remote also drops the tracking ref."""
        git_ops = GitOperations(git_repo_with_branches.working_dir)
        git_ops.delete_remote_branch("origin", "feature-a")

        origin = git.Repo(git_repo_with_branches.remote("origin").url)
        assert "feature-a" not in [head.name for head in origin.heads]
        assert "feature-a" not in git_ops.list_remote_branches("origin")

    def test_delete_remote_branch_not_found(self, git_repo):
        """Test deleting a branch the remote does not have."""
        git_ops = GitOperations(git_repo.working_dir)
        with pytest.raises(BranchNotFoundError):
            git_ops.delete_remote_branch("origin", "ghost")


class TestBranchQueries:
    """Test candidate enumeration on top of GitOperations."""

    def test_base_branch_marked_and_skipped(self, mock_git_ops):
        """Test the base branch is recognised by name and left out."""
        mock_git_ops.list_local_branches.return_value = ["feature-a", "main"]
        queries = BranchQueries(mock_git_ops, "main", "origin")

        branches = queries.list_branches(Scope.LOCAL)

        assert branches == [Branch("feature-a", Scope.LOCAL)]

    def test_remote_branches_carry_remote(self, git_repo_with_branches):
        """Test remote candidates belong to the configured remote, base excluded."""
        queries = BranchQueries(GitOperations(git_repo_with_branches.working_dir), "main", "origin")

        branches = queries.list_branches(Scope.REMOTE)

        assert sorted(branch.name for branch in branches) == ["feature-a", "feature-b", "feature-c"]
        assert all(branch.remote == "origin" and not branch.is_base for branch in branches)

    def test_listing_failure_names_scope(self, mock_git_ops):
        """Test a failed query becomes an EnumerationError for that scope."""
        mock_git_ops.list_remote_branches.side_effect = GitOperationError(
            "list_remote_branches", message="bad ref"
        )
        queries = BranchQueries(mock_git_ops, "main", "origin")

        with pytest.raises(EnumerationError) as exc_info:
            queries.list_branches(Scope.REMOTE)
        assert exc_info.value.scope == Scope.REMOTE
