"""Threading utilities for sizing the branch classification pool."""

import os
import sys
from typing import Dict, Any, Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with the GIL disabled (3.13+ free-threading build)."""
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    if is_gil_enabled is None:
        return False
    return not is_gil_enabled()


def get_python_threading_mode() -> str:
    """Describe the interpreter's threading mode."""
    if not hasattr(sys, "_is_gil_enabled"):
        return "GIL-enabled (Python < 3.13)"
    return "free-threading" if is_free_threading_enabled() else "GIL-enabled"


def get_optimal_worker_count(
    user_specified: Optional[int] = None, task_count: Optional[int] = None
) -> int:
    """Calculate the worker count for classifying branches.

    Classification is I/O bound (one git subprocess per query), so the pool
    is sized above the CPU count.

    Args:
        user_specified: Worker count from --workers, if provided
        task_count: Number of branches to classify; the pool never exceeds it

    Returns:
        Number of workers, at least 1
    """
    if user_specified is not None and user_specified > 0:
        workers = user_specified
    else:
        cpu_count = os.cpu_count() or 1
        if is_free_threading_enabled():
            workers = min(64, cpu_count * 2)
        else:
            workers = min(32, cpu_count + 4)

    if task_count is not None:
        workers = min(workers, max(task_count, 1))
    return workers


def get_threading_info() -> Dict[str, Any]:
    """Summarize the threading configuration for --debug output."""
    return {
        "mode": get_python_threading_mode(),
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }
