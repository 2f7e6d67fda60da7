"""
git-clean - delete branches already merged into the base branch
"""

from .__version__ import __version__
from .config import DeleteMode, Options
from .core import BranchCleaner, run
from .cli.main import main

__all__ = ["BranchCleaner", "DeleteMode", "Options", "run", "main", "__version__"]
