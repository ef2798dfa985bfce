"""Stash operations."""

from typing import Optional, Tuple

from git_status_tree.services.git_runner import GitRunner
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)


class StashService:
    """Service for applying stashes."""

    def __init__(self, runner: GitRunner):
        self.runner = runner

    def apply(self, stash: str, pop: bool = False) -> Tuple[bool, Optional[str]]:
        """Apply (or pop) a stash, restoring the index when possible.

        The first attempt passes ``--index``. When it fails, one more attempt
        is made without it. The reason of the first failure is not inspected:
        staged conflicts are the expected cause, and any other cause makes
        the second attempt fail as well.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        command = "pop" if pop else "apply"
        status, output = self.runner.run(["stash", command, "--index", stash])
        if status == 0:
            logger.info(f"Stash {stash} {command} succeeded with index")
            return True, None

        logger.warning(
            f"git stash {command} --index {stash} failed (exit {status}); retrying without --index"
        )
        status, output = self.runner.run(["stash", command, stash])
        if status == 0:
            logger.info(f"Stash {stash} {command} succeeded without index")
            return True, None

        error_msg = f"git stash {command} failed (exit {status})"
        if output:
            error_msg += ": " + "\n".join(output).strip()
        logger.error(error_msg)
        return False, error_msg
