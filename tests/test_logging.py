"""Tests for logging setup and the per-view logger"""
import logging
from types import SimpleNamespace

import pytest
from rich.logging import RichHandler

from git_status_tree.utils.logging import (
    LOG_DIR_ENV,
    LOG_FILE_NAME,
    PACKAGE,
    ViewLogger,
    get_log_dir,
    get_logger,
    setup_logging,
)


@pytest.fixture
def package_logger(temp_dir, monkeypatch):
    """Package logger writing below the temporary directory; handlers are removed afterwards."""
    monkeypatch.setenv(LOG_DIR_ENV, str(temp_dir / "logs"))
    logger = logging.getLogger(PACKAGE)
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


class TestSetupLogging:
    """Test handler configuration."""

    def test_log_dir_from_environment(self, temp_dir, monkeypatch):
        """Test that the log directory can be moved through the environment."""
        monkeypatch.setenv(LOG_DIR_ENV, str(temp_dir))
        assert get_log_dir() == temp_dir

    def test_tui_mode_logs_to_file_only(self, package_logger, temp_dir):
        """Test that interactive runs keep the terminal free."""
        log_file = setup_logging(tui_mode=True)

        assert log_file == temp_dir / "logs" / LOG_FILE_NAME
        assert [type(h) for h in package_logger.handlers] == [logging.FileHandler]
        assert package_logger.level == logging.DEBUG

        get_logger("views.status").debug("refreshed")
        package_logger.handlers[0].flush()
        assert "views.status - DEBUG - refreshed" in log_file.read_text()

    def test_one_shot_logs_to_console(self, package_logger):
        """Test that a one-shot run logs warnings to stderr through rich."""
        assert setup_logging() is None
        assert [type(h) for h in package_logger.handlers] == [RichHandler]
        assert package_logger.level == logging.WARNING

    def test_setup_replaces_handlers(self, package_logger):
        """Test that a second setup does not stack handlers."""
        setup_logging(verbose=True)
        setup_logging(verbose=True)
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.INFO

    def test_module_loggers_are_below_the_package(self):
        """Test logger naming for module paths."""
        assert get_logger("git_status_tree.views.base").name == "git_status_tree.views.base"
        assert get_logger("views.base").name == "git_status_tree.views.base"


class TestViewLogger:
    """Test the per-view adapter."""

    @pytest.fixture
    def records(self):
        logger = logging.getLogger(f"{PACKAGE}.tests.view")
        captured = []
        handler = logging.Handler()
        handler.emit = captured.append
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        yield logger, captured
        logger.removeHandler(handler)

    def test_prefix_follows_generation(self, records):
        """Test that records carry the view title and current generation."""
        logger, captured = records
        view = SimpleNamespace(title="status", generation=1)
        log = ViewLogger(logger, view)

        log.debug("first")
        view.generation = 2
        log.debug("second")

        assert [r.getMessage() for r in captured] == ["[status #1] first", "[status #2] second"]

    def test_diagnostics_are_logged_at_info(self, records):
        """Test that each diagnostic becomes one INFO record."""
        logger, captured = records
        log = ViewLogger(logger, SimpleNamespace(title="branches", generation=4))

        log.diagnostics(["insert_tags: boom", "git fetch exited with 1"])

        assert [r.levelno for r in captured] == [logging.INFO, logging.INFO]
        assert captured[1].getMessage() == "[branches #4] diagnostic: git fetch exited with 1"
