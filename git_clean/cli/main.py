"""Command-line entry point for git-clean"""

import os
import sys

from rich.console import Console

from git_clean.cli.args import parse_args
from git_clean.config import DeleteMode, Options, build_ignored
from git_clean.core import run
from git_clean.models.branch import ExitStatus
from git_clean.utils.logging import get_log_file, setup_logging
from git_clean.utils.threading import get_threading_info

console = Console()


def options_from_args(parsed_args) -> Options:
    """Build run options from parsed command-line arguments."""
    return Options(
        remote_name=parsed_args.remote,
        base_branch=parsed_args.branch,
        delete_mode=DeleteMode.from_flags(parsed_args.locals, parsed_args.remotes),
        check_squashes=parsed_args.squashes,
        delete_unpushed=parsed_args.delete_unpushed_branches,
        ignored_branches=build_ignored(parsed_args.ignore),
        skip_confirmation=parsed_args.yes,
        dry_run=parsed_args.dry_run,
        fetch=parsed_args.fetch,
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
        sequential=parsed_args.sequential,
        workers=parsed_args.workers,
    )


def _print_debug_info(options: Options) -> None:
    console.print("[yellow]Debug mode enabled[/yellow]")
    console.print(f"[dim]Log file: {get_log_file()}[/dim]")

    threading_info = get_threading_info()
    console.print("[yellow]Threading Information:[/yellow]")
    console.print(f"  Python version: {threading_info['python_version']}")
    console.print(f"  Threading mode: {threading_info['mode']}")
    console.print(f"  CPU count: {threading_info['cpu_count']}")
    console.print(f"  Optimal workers: {threading_info['optimal_workers']}")

    console.print("[yellow]Configuration:[/yellow]")
    for key, value in options.to_dict().items():
        console.print(f"  {key}: {value}")
    console.print("[dim]Note: Debug mode forces sequential processing for readable logs[/dim]")


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    try:
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        options = options_from_args(parsed_args)
        if options.debug:
            _print_debug_info(options)

        return int(run(options, repo_path=os.getcwd()))
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return int(ExitStatus.FATAL)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]", markup=False)
        if parsed_args.debug:
            console.print_exception()
        return int(ExitStatus.FATAL)


if __name__ == "__main__":
    sys.exit(main())
