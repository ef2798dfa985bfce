"""Tests for running git synchronously and in the background"""
import time

import pytest

from git_status_tree.services.git_runner import split_output


class TestGitRunner:
    """Test GitRunner against a real repository."""

    def test_run(self, runner):
        """Test a successful invocation."""
        status, lines = runner.run(["rev-parse", "--abbrev-ref", "HEAD"])
        assert status == 0
        assert lines == ["main"]

    def test_failure(self, runner):
        """Test that failures report their exit code and no lines."""
        status, _ = runner.run(["rev-parse", "--verify", "-q", "no-such-ref"])
        assert status != 0
        assert runner.lines(["rev-parse", "--verify", "-q", "no-such-ref"]) == []
        assert runner.value(["rev-parse", "--verify", "-q", "no-such-ref"]) is None
        assert not runner.succeeds(["rev-parse", "--verify", "-q", "no-such-ref"])

    def test_run_async_wait(self, runner):
        """Test that the completion fires once with the exit code."""
        completions = []
        handle = runner.run_async(["log", "--format=%s"], completions.append)

        assert runner.wait(handle, timeout=30) == 0
        assert completions == [0]
        assert runner.output(handle) == ["Initial commit"]
        assert runner.exit_code(handle) == 0
        assert runner.pending == []
        assert runner.poll() == []
        assert completions == [0]

    def test_run_async_poll(self, runner):
        """Test delivery of completions from poll()."""
        completions = []
        handle = runner.run_async(["status", "--porcelain"], completions.append)

        deadline = time.monotonic() + 30
        while handle in runner.pending and time.monotonic() < deadline:
            runner.poll()
            time.sleep(0.01)

        assert completions == [0]

    def test_cancel(self, runner):
        """Test that a cancelled invocation never completes."""
        completions = []
        handle = runner.run_async(["-c", "alias.snooze=!sleep 30", "snooze"], completions.append)

        assert runner.cancel(handle) is True
        assert runner.pending == []
        assert runner.poll() == []
        assert completions == []
        assert runner.cancel(handle) is False


class TestSplitOutput:
    """Test output splitting."""

    @pytest.mark.parametrize("stdout,expected", [
        ("", []),
        ("one\n", ["one"]),
        ("one\ntwo", ["one", "two"]),
        ("one\n\nthree\n", ["one", "", "three"]),
        ("carriage\rreturn\n", ["carriage\rreturn"]),
    ])
    def test_split(self, stdout, expected):
        """Test that only newlines split lines."""
        assert split_output(stdout) == expected
