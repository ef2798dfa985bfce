"""Pytest fixtures for git-status-tree tests"""
import tempfile
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pytest
import git

from git_status_tree.config import Config
from git_status_tree.services.git_runner import GitRunner


class FakeRunner(GitRunner):
    """GitRunner answering from a script instead of running git.

    Unscripted invocations fail with exit code 1 and no output.
    """

    def __init__(self, responses: Dict[Tuple[str, ...], Tuple[int, List[str]]] = None, repo_path="/fake/repo"):
        super().__init__(repo_path)
        self.responses = dict(responses or {})
        self.calls: List[List[str]] = []

    def respond(self, args: Sequence[str], lines: Sequence[str], status: int = 0) -> None:
        self.responses[tuple(args)] = (status, list(lines))

    def run(self, args):
        self.calls.append(list(args))
        return self.responses.get(tuple(args), (1, []))

    def count(self, *prefix: str) -> int:
        """Number of recorded calls starting with ``prefix``."""
        return sum(1 for call in self.calls if tuple(call[:len(prefix)]) == prefix)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_runner():
    """Scripted runner with no responses."""
    return FakeRunner()


@pytest.fixture
def config():
    """Default configuration for a fake repository."""
    return Config(repo_path="/fake/repo", interactive=False)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a Git repository with a feature branch and a tag."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.create_tag("v1.0")

    # Feature branch with two commits HEAD does not have
    repo.git.checkout('-b', 'feature/test-feature')
    for number in (1, 2):
        feature_file = repo_path / f"feature{number}.txt"
        feature_file.write_text(f"Feature content {number}\n")
        repo.index.add([f"feature{number}.txt"])
        repo.index.commit(f"Add feature part {number}")

    repo.git.checkout('main')
    main_file = repo_path / "main.txt"
    main_file.write_text("Main content\n")
    repo.index.add(["main.txt"])
    repo.index.commit("Work on main")

    yield repo


@pytest.fixture
def runner(git_repo):
    """Real runner bound to the test repository."""
    runner = GitRunner(git_repo.working_dir)
    yield runner
    runner.cancel_all()
