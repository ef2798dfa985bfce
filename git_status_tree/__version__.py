"""Version information for git-status-tree."""

try:
    from git_status_tree._version import __version__
except ImportError:
    # Fallback for development without tags or when running from source
    __version__ = "0.0.0+unknown"
