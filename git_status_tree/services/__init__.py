"""Services wrapping git and the filesystem."""

from .git_runner import GitRunner
from .repo_scanner import (
    RepositoryScanner,
    is_repository,
    list_directories,
    list_repositories,
    scan_repositories,
    uniquify,
)
from .stash_service import StashService

__all__ = [
    "GitRunner",
    "RepositoryScanner",
    "is_repository",
    "list_directories",
    "list_repositories",
    "scan_repositories",
    "uniquify",
    "StashService",
]
