"""Command-line argument parsing for git-clean."""

import argparse
from git_clean.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="git-clean",
        description="Delete branches that are already merged into the base branch",
    )
    parser.add_argument("--version", action="version", version=f"git-clean {__version__}")

    scope = parser.add_mutually_exclusive_group()
    scope.add_argument(
        "-l", "--locals", action="store_true", help="only delete local branches"
    )
    scope.add_argument(
        "-r", "--remotes", action="store_true", help="only delete remote branches"
    )

    parser.add_argument(
        "-y", "--yes", action="store_true", help="skip the check for deleting branches"
    )
    parser.add_argument(
        "-s",
        "--squashes",
        action="store_true",
        help="check for squashes by finding branches whose changes are already in the base branch",
    )
    parser.add_argument(
        "-R", "--remote", default="origin", help="changes the git remote used (default: origin)"
    )
    parser.add_argument(
        "-b",
        "--branch",
        default="main",
        help="changes the base for merged branches (default: main)",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        action="append",
        default=[],
        metavar="BRANCH",
        help="ignore given branch (repeatable)",
    )
    parser.add_argument(
        "--delete-unpushed-branches",
        action="store_true",
        help="delete any local branch that is not present on the remote",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview mode - show what would be deleted without actually deleting",
    )
    parser.add_argument(
        "--fetch",
        action="store_true",
        help="Fetch and prune the remote before looking at remote branches",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers for branch classification (default: auto-detect)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Force sequential classification (disable parallelism)",
    )
    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
