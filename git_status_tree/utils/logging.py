"""Logging setup for git-status-tree.

The TUI owns the terminal, so interactive runs log to a file only. One-shot
runs log to stderr through rich.
"""
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE = 'git_status_tree'
LOG_DIR_ENV = 'GIT_STATUS_TREE_LOG_DIR'
LOG_FILE_NAME = 'git-status-tree.log'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_log_dir() -> Path:
    """Directory holding the log file, overridable through the environment."""
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / '.git-status-tree'


def resolve_level(verbose: bool = False, debug: bool = False) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> Optional[Path]:
    """
    Configure the package logger.

    Args:
        verbose: Show INFO messages (refreshes, git invocations)
        debug: Show DEBUG messages (section counts, washer runs, reconciles)
        tui_mode: Log to file only; the file always receives DEBUG

    Returns:
        Path of the log file, or None when logging to stderr only
    """
    level = resolve_level(verbose, debug)
    package_logger = logging.getLogger(PACKAGE)
    package_logger.setLevel(logging.DEBUG if tui_mode else level)
    package_logger.propagate = False
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    log_file = None
    if tui_mode or debug:
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        package_logger.addHandler(file_handler)

    if not tui_mode:
        console_handler = RichHandler(
            console=Console(stderr=True),
            level=level,
            show_time=debug,
            show_path=debug,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter('[%(name)s] %(message)s'))
        package_logger.addHandler(console_handler)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of the package (pass ``__name__``)."""
    if not name.startswith(PACKAGE):
        name = f'{PACKAGE}.{name}'
    return logging.getLogger(name)


class ViewLogger(logging.LoggerAdapter):
    """Prefix records with the view title and its tree generation."""

    def __init__(self, logger: logging.Logger, view):
        super().__init__(logger, {})
        self.view = view

    def process(self, msg, kwargs):
        return f"[{self.view.title} #{self.view.generation}] {msg}", kwargs

    def diagnostics(self, messages: Iterable[str]) -> None:
        """Record the diagnostics of one refresh; the UI shows them separately."""
        for message in messages:
            self.info(f"diagnostic: {message}")
