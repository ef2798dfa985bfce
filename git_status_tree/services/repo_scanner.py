"""Repository discovery under a set of search roots."""

import os
from collections import OrderedDict
from pathlib import PurePath
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from git_status_tree.config import Config
from git_status_tree.constants import REPOSITORY_MARKER, UNIQUIFY_SEPARATOR
from git_status_tree.exceptions import ScanIOError
from git_status_tree.models.records import RepoEntry
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)

RepositoryCheck = Callable[[str], bool]
DirectoryLister = Callable[[str], List[str]]


def is_repository(path: str) -> bool:
    """True when ``path`` carries a repository marker (``.git`` file or directory)."""
    return os.path.exists(os.path.join(path, REPOSITORY_MARKER))


def list_directories(path: str) -> List[str]:
    """Non-hidden subdirectories of ``path``, sorted by name.

    Raises:
        ScanIOError: ``path`` cannot be read
    """
    try:
        with os.scandir(path) as entries:
            names = sorted(
                entry.name
                for entry in entries
                if not entry.name.startswith(".") and entry.is_dir()
            )
    except OSError as e:
        raise ScanIOError(path, e) from e
    return [os.path.join(path, name) for name in names]


class RepositoryScanner:
    """Depth-bounded walk collecting repository roots."""

    def __init__(
        self,
        is_repository: RepositoryCheck = is_repository,
        list_directories: DirectoryLister = list_directories,
    ):
        self.is_repository = is_repository
        self.list_directories = list_directories
        self.errors: List[ScanIOError] = []

    def scan(self, roots: Iterable[Tuple[str, int]]) -> List[str]:
        """Scan several (root, depth) pairs; duplicates are reported once."""
        found: List[str] = []
        seen = set()
        for root, depth in roots:
            for path in self.scan_root(root, depth):
                if path not in seen:
                    seen.add(path)
                    found.append(path)
        return found

    def scan_root(self, root: str, depth: int) -> List[str]:
        """Collect repositories at or below ``root``, at most ``depth`` levels down.

        Depth 0 only lets ``root`` itself qualify. A directory that is a
        repository is not descended into.
        """
        if depth < 0:
            raise ValueError(f"Scan depth must be non-negative, got {depth}")
        root = os.path.abspath(os.path.expanduser(root))
        found: List[str] = []
        self._scan(root, depth, found)
        return found

    def _scan(self, directory: str, depth: int, found: List[str]) -> None:
        if self.is_repository(directory):
            found.append(directory)
            return
        if depth <= 0:
            return
        try:
            children = self.list_directories(directory)
        except ScanIOError as e:
            logger.warning(str(e))
            self.errors.append(e)
            return
        for child in children:
            self._scan(child, depth - 1, found)


def scan_repositories(
    roots: Sequence[str],
    depth: int,
    is_repository: RepositoryCheck = is_repository,
    list_directories: DirectoryLister = list_directories,
) -> List[str]:
    """Repository roots found under ``roots`` within ``depth`` levels."""
    scanner = RepositoryScanner(is_repository, list_directories)
    return scanner.scan((root, depth) for root in roots)


def _parent_segment(path: str, level: int) -> Optional[str]:
    """Name of the ``level``-th parent directory of ``path`` (1 = immediate parent)."""
    parents = PurePath(path).parents
    if level > len(parents) - 1:
        return None
    name = parents[level - 1].name
    return name or None


def uniquify(pairs: Iterable[Tuple[str, str]]) -> List[RepoEntry]:
    """Disambiguate colliding display names.

    Names unique within ``pairs`` pass through unchanged. Colliding names get
    the parent directory appended (``repo\\a``), and the result is uniquified
    again, one more directory level each round, since two repositories can
    still collide after one level.
    """
    entries = [(name, path, 0) for name, path in OrderedDict.fromkeys(pairs)]
    return [RepoEntry(path=path, name=name) for name, path in _uniquify(entries)]


def _uniquify(entries: List[Tuple[str, str, int]]) -> List[Tuple[str, str]]:
    groups: "OrderedDict[str, List[Tuple[str, int]]]" = OrderedDict()
    for name, path, level in entries:
        groups.setdefault(name, []).append((path, level))

    result: List[Tuple[str, str]] = []
    for name, members in groups.items():
        if len(members) == 1:
            result.append((name, members[0][0]))
            continue

        retry = []
        for path, level in members:
            segment = _parent_segment(path, level + 1)
            if segment is None:
                # Out of parent directories; the full path is unique
                result.append((f"{name}{UNIQUIFY_SEPARATOR}{path}", path))
                continue
            retry.append((f"{name}{UNIQUIFY_SEPARATOR}{segment}", path, level + 1))
        result.extend(_uniquify(retry))
    return result


def repository_name(path: str) -> str:
    """Default display name of a repository: its directory name."""
    return os.path.basename(os.path.normpath(path)) or path


def list_repositories(
    roots: Union[Config, Iterable[Tuple[str, int]]],
    is_repository: RepositoryCheck = is_repository,
    list_directories: DirectoryLister = list_directories,
) -> List[RepoEntry]:
    """Discover repositories and give each a unique display name, sorted by name.

    Args:
        roots: (directory, depth) pairs, or a Config whose repository_directories are scanned
    """
    if isinstance(roots, Config):
        roots = roots.scan_roots()
    scanner = RepositoryScanner(is_repository, list_directories)
    paths = scanner.scan(roots)
    entries = uniquify((repository_name(path), path) for path in paths)
    return sorted(entries, key=lambda entry: (entry.name.lower(), entry.path))
