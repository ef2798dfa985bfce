"""Command-line argument parsing for git-status-tree."""

import argparse

from git_status_tree.__version__ import __version__
from git_status_tree.constants import DEFAULT_LOG_LIMIT, DEFAULT_REPOSITORY_DEPTH, DEFAULT_STATUS_SECTIONS


def _scan_directory(value: str):
    """Parse ``DIR`` or ``DIR:DEPTH``."""
    path, sep, depth = value.rpartition(":")
    if sep and depth.isdigit() and path:
        return path, int(depth)
    return value, None


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Section-based git status, branch and repository viewer",
        epilog="Sections fold with tab in the interactive view; press l there for the legend.",
    )
    parser.add_argument(
        "view",
        nargs="?",
        choices=["status", "branches", "repos"],
        default="status",
        help="What to show (default: status)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-status-tree {__version__}")
    parser.add_argument("--path", default=".", help="Repository to show (default: current directory)")
    parser.add_argument(
        "--interactive", action="store_true", help="Launch interactive TUI mode (default for TTY)"
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Print the view once and exit (for scripts/automation)",
    )
    parser.add_argument(
        "--scan-dir",
        action="append",
        default=[],
        type=_scan_directory,
        metavar="DIR[:DEPTH]",
        help="Directory searched for repositories by the repos view (repeatable)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_REPOSITORY_DEPTH,
        help=f"Default repository search depth (default: {DEFAULT_REPOSITORY_DEPTH})",
    )
    parser.add_argument(
        "--sections",
        nargs="+",
        choices=DEFAULT_STATUS_SECTIONS,
        default=None,
        help="Status sections to show, in order",
    )
    parser.add_argument(
        "--log-limit",
        type=int,
        default=DEFAULT_LOG_LIMIT,
        help=f"Maximum commits listed per section (default: {DEFAULT_LOG_LIMIT})",
    )
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="KIND",
        help="Section kind shown expanded by default, e.g. branch (repeatable)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    return parser.parse_args(argv)
