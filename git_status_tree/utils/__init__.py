"""Utility functions for git-status-tree.

This package provides utility modules:
- logging: Logging configuration, module loggers and the per-view adapter
"""

from .logging import ViewLogger, get_log_dir, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "get_log_dir",
    "ViewLogger",
]
