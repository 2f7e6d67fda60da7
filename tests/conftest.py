"""Pytest fixtures for git-clean tests"""
import io
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git
from rich.console import Console

from git_clean.config import DeleteMode, Options
from git_clean.services.git import GitOperations


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_commit():
    """Return a helper that writes a file and commits it on the current branch."""
    def _commit(repo, filename, content, message):
        path = Path(repo.working_dir) / filename
        path.write_text(content)
        repo.index.add([filename])
        return repo.index.commit(message)

    return _commit


@pytest.fixture
def git_repo(temp_dir, make_commit):
    """Create a real Git repository on main with a bare 'origin' remote."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    make_commit(repo, "README.md", "# Test Repository\n", "Initial commit")
    repo.git.branch('-M', 'main')

    # Bare repository acting as the remote
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)
    repo.create_remote('origin', str(origin_path))
    repo.git.push('origin', 'main')

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo, make_commit):
    """Create a repository covering every classification.

    - feature-a: merged into main with a merge commit, pushed
    - feature-b: diverged from main, pushed
    - feature-c: squash-merged into main, pushed
    - feature-d: diverged from main, never pushed
    """
    repo = git_repo

    # Merged branch
    repo.git.checkout('-b', 'feature-a')
    make_commit(repo, "a.txt", "Feature A\n", "Add feature A")
    repo.git.push('origin', 'feature-a')
    repo.git.checkout('main')
    repo.git.merge('feature-a', '--no-ff', '-m', 'Merge feature-a')

    # Diverged branch
    repo.git.checkout('-b', 'feature-b')
    make_commit(repo, "b.txt", "Feature B\n", "Add feature B")
    repo.git.push('origin', 'feature-b')
    repo.git.checkout('main')

    # Squash-merged branch (two commits collapsed into one on main)
    repo.git.checkout('-b', 'feature-c')
    make_commit(repo, "c.txt", "Feature C\n", "Add feature C")
    make_commit(repo, "c.txt", "Feature C\nMore C\n", "Extend feature C")
    repo.git.push('origin', 'feature-c')
    repo.git.checkout('main')
    repo.git.merge('--squash', 'feature-c')
    repo.git.commit('-m', 'Feature C (squashed)')

    # Local-only branch
    repo.git.checkout('-b', 'feature-d')
    make_commit(repo, "d.txt", "Feature D\n", "Add feature D")
    repo.git.checkout('main')

    # Main keeps moving after the merges
    make_commit(repo, "CHANGELOG.md", "Changes\n", "Update changelog")
    repo.git.push('origin', 'main')

    yield repo


@pytest.fixture
def default_options():
    """Options for a non-interactive run on main against origin."""
    return Options(
        remote_name="origin",
        base_branch="main",
        delete_mode=DeleteMode.BOTH,
        skip_confirmation=True,
        sequential=True,
    )


@pytest.fixture
def mock_git_ops():
    """Create a mock GitOperations on a clean 'main' checkout."""
    git_ops = Mock(spec=GitOperations)
    git_ops.current_branch = Mock(return_value="main")
    git_ops.list_remotes = Mock(return_value=["origin"])
    git_ops.list_local_branches = Mock(return_value=[])
    git_ops.list_remote_branches = Mock(return_value=[])
    git_ops.is_ancestor = Mock(return_value=False)
    git_ops.merge_base = Mock(return_value="abc1234def")
    git_ops.diff_is_empty = Mock(return_value=False)
    git_ops.delete_local_branch = Mock(return_value=None)
    git_ops.delete_remote_branch = Mock(return_value=None)
    return git_ops


@pytest.fixture
def recording_console():
    """A rich Console that records output instead of writing to the terminal."""
    return Console(file=io.StringIO(), record=True, width=120)
