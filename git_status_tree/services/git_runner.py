"""Invocation boundary between the section engine and the git executable."""

import os
import subprocess
import tempfile
from dataclasses import dataclass, field
from typing import IO, Callable, Dict, List, Optional, Sequence, Tuple

import git

from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)

CompletionCallback = Callable[[int], None]


@dataclass
class AsyncCall:
    """A git process started by run_async."""
    handle: int
    args: List[str]
    process: subprocess.Popen
    capture: IO[bytes]
    on_complete: Optional[CompletionCallback]
    exit_code: Optional[int] = None
    output: List[str] = field(default_factory=list)


def split_output(stdout: str) -> List[str]:
    """Split git output into lines without interpreting other line breaks."""
    if not stdout:
        return []
    if stdout.endswith("\n"):
        stdout = stdout[:-1]
    return stdout.split("\n")


class GitRunner:
    """Run git in a repository.

    ``args`` are always pre-tokenized; no shell is involved.
    """

    def __init__(self, repo_path: str):
        """Initialize the runner.

        Args:
            repo_path: Working directory for every git invocation
        """
        self.repo_path = repo_path
        self._git = git.Git(repo_path)
        self._pending: Dict[int, AsyncCall] = {}
        self._finished: Dict[int, AsyncCall] = {}
        self._next_handle = 1

    def _executable(self) -> str:
        return git.Git.GIT_PYTHON_GIT_EXECUTABLE or "git"

    def run(self, args: Sequence[str]) -> Tuple[int, List[str]]:
        """Run git synchronously.

        Returns:
            Tuple of (exit_code, stdout_lines)
        """
        command = [self._executable(), *args]
        try:
            status, stdout, stderr = self._git.execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            logger.error(f"git executable not found: {e}")
            return 127, []

        if status != 0:
            logger.debug(f"git {' '.join(args)} exited with {status}: {stderr.strip()}")
        return status, split_output(stdout)

    def lines(self, args: Sequence[str]) -> List[str]:
        """Output lines of a successful invocation, or [] when git fails."""
        status, output = self.run(args)
        return output if status == 0 else []

    def value(self, args: Sequence[str]) -> Optional[str]:
        """First output line of a successful invocation, or None."""
        output = self.lines(args)
        if not output or not output[0]:
            return None
        return output[0]

    def succeeds(self, args: Sequence[str]) -> bool:
        status, _ = self.run(args)
        return status == 0

    def run_async(self, args: Sequence[str], on_complete: Optional[CompletionCallback] = None) -> int:
        """Start git and return immediately.

        Output is captured to a temporary file; ``on_complete(exit_code)``
        fires from poll() once the process exited and its output is
        available through output().

        Returns:
            Handle identifying the invocation
        """
        capture = tempfile.TemporaryFile()
        command = [self._executable(), *args]
        try:
            process = subprocess.Popen(
                command,
                cwd=self.repo_path,
                stdin=subprocess.DEVNULL,
                stdout=capture,
                stderr=subprocess.STDOUT,
                env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            )
        except OSError:
            capture.close()
            raise

        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = AsyncCall(
            handle=handle,
            args=list(args),
            process=process,
            capture=capture,
            on_complete=on_complete,
        )
        logger.debug(f"Started git {' '.join(args)} (handle {handle}, pid {process.pid})")
        return handle

    @property
    def pending(self) -> List[int]:
        return list(self._pending)

    def poll(self) -> List[int]:
        """Deliver completions of finished processes.

        Returns:
            Handles whose completion callback fired
        """
        completed = []
        for handle, call in list(self._pending.items()):
            exit_code = call.process.poll()
            if exit_code is None:
                continue
            self._complete(call, exit_code)
            completed.append(handle)
        return completed

    def wait(self, handle: int, timeout: Optional[float] = None) -> Optional[int]:
        """Block until ``handle`` finishes, then deliver its completion."""
        call = self._pending.get(handle)
        if call is None:
            finished = self._finished.get(handle)
            return finished.exit_code if finished else None
        exit_code = call.process.wait(timeout=timeout)
        self._complete(call, exit_code)
        return exit_code

    def _complete(self, call: AsyncCall, exit_code: int) -> None:
        del self._pending[call.handle]
        call.capture.seek(0)
        call.output = split_output(call.capture.read().decode("utf-8", errors="replace"))
        call.capture.close()
        call.exit_code = exit_code
        self._finished[call.handle] = call
        logger.debug(f"git {' '.join(call.args)} finished with {exit_code} (handle {call.handle})")
        if call.on_complete is not None:
            try:
                call.on_complete(exit_code)
            except Exception as e:
                logger.error(f"Completion handler for git {' '.join(call.args)} failed: {e}")

    def output(self, handle: int) -> List[str]:
        """Captured output of a finished invocation."""
        call = self._finished.get(handle)
        return list(call.output) if call else []

    def exit_code(self, handle: int) -> Optional[int]:
        call = self._finished.get(handle)
        return call.exit_code if call else None

    def cancel(self, handle: int) -> bool:
        """Kill a running invocation; its completion callback never fires."""
        call = self._pending.pop(handle, None)
        if call is None:
            return False
        call.process.kill()
        call.process.wait()
        call.capture.close()
        logger.info(f"Killed git {' '.join(call.args)} (handle {handle})")
        return True

    def cancel_all(self) -> None:
        for handle in list(self._pending):
            self.cancel(handle)
