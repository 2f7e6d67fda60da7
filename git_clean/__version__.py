"""Version information for git-clean."""

try:
    from git_clean._version import __version__
except ImportError:
    # Fallback when running from a source tree that was never installed
    __version__ = "0.0.0+unknown"
