"""Configuration handling for git-status-tree"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from git_status_tree.constants import (
    DEFAULT_HIDDEN,
    DEFAULT_LOG_LIMIT,
    DEFAULT_REPOSITORY_DEPTH,
    DEFAULT_STATUS_SECTIONS,
)
from git_status_tree.models.section import SectionKind


@dataclass
class Config:
    """Configuration for git-status-tree with validation."""

    # Repository shown by the status and branch views
    repo_path: str = "."

    # Repository discovery: (directory, depth) pairs; depth None = repository_depth
    repository_directories: List[Tuple[str, Optional[int]]] = field(default_factory=list)
    repository_depth: int = DEFAULT_REPOSITORY_DEPTH

    # Section layout
    status_sections: List[str] = field(default_factory=lambda: list(DEFAULT_STATUS_SECTIONS))
    hidden_defaults: Dict[str, bool] = field(default_factory=dict)  # kind name -> hidden
    log_limit: int = DEFAULT_LOG_LIMIT

    # Execution modes
    interactive: bool = True
    verbose: bool = False
    debug: bool = False
    refresh_interval: float = 0.2  # Seconds between polls for finished git processes

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_repo_path()
        self._validate_repository_directories()
        self._validate_repository_depth()
        self._validate_status_sections()
        self._validate_hidden_defaults()
        self._validate_log_limit()
        self._validate_refresh_interval()

    def _validate_repo_path(self):
        """Validate repo_path is not empty."""
        if not self.repo_path or not str(self.repo_path).strip():
            raise ValueError("repo_path cannot be empty")
        self.repo_path = str(self.repo_path).strip()

    def _validate_repository_directories(self):
        """Normalize repository_directories into (path, depth) pairs."""
        if not isinstance(self.repository_directories, list):
            raise ValueError("repository_directories must be a list")
        normalized = []
        for entry in self.repository_directories:
            if isinstance(entry, str):
                path, depth = entry, None
            else:
                path, depth = entry
            if depth is not None and depth < 0:
                raise ValueError(f"Scan depth for '{path}' must be non-negative, got {depth}")
            normalized.append((str(path), depth))
        self.repository_directories = normalized

    def _validate_repository_depth(self):
        """Validate repository_depth is non-negative."""
        if self.repository_depth < 0:
            raise ValueError(f"repository_depth must be non-negative, got {self.repository_depth}")

    def _validate_status_sections(self):
        """Validate status_sections only names known inserters."""
        unknown = [name for name in self.status_sections if name not in DEFAULT_STATUS_SECTIONS]
        if unknown:
            raise ValueError(f"Unknown status sections {unknown}; allowed: {DEFAULT_STATUS_SECTIONS}")

    def _validate_hidden_defaults(self):
        """Validate hidden_defaults keys are section kinds."""
        allowed = [kind.value for kind in SectionKind]
        for name in self.hidden_defaults:
            if name not in allowed:
                raise ValueError(f"hidden_defaults keys must be one of {allowed}, got '{name}'")

    def _validate_log_limit(self):
        """Validate log_limit is positive."""
        if self.log_limit <= 0:
            raise ValueError(f"log_limit must be positive, got {self.log_limit}")

    def _validate_refresh_interval(self):
        """Validate refresh_interval is positive."""
        if self.refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {self.refresh_interval}")

    def section_hidden_defaults(self) -> Dict[SectionKind, bool]:
        """Per-kind fold policy: built-in defaults overridden by hidden_defaults."""
        policy = dict(DEFAULT_HIDDEN)
        for name, hidden in self.hidden_defaults.items():
            policy[SectionKind(name)] = bool(hidden)
        return policy

    def scan_roots(self) -> List[Tuple[str, int]]:
        """Repository directories with their effective scan depth."""
        return [
            (path, self.repository_depth if depth is None else depth)
            for path, depth in self.repository_directories
        ]

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "repo_path": self.repo_path,
            "repository_directories": list(self.repository_directories),
            "repository_depth": self.repository_depth,
            "status_sections": list(self.status_sections),
            "hidden_defaults": dict(self.hidden_defaults),
            "log_limit": self.log_limit,
            "interactive": self.interactive,
            "verbose": self.verbose,
            "debug": self.debug,
            "refresh_interval": self.refresh_interval,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        # Extract only known fields
        known_fields = {
            "repo_path",
            "repository_directories",
            "repository_depth",
            "status_sections",
            "hidden_defaults",
            "log_limit",
            "interactive",
            "verbose",
            "debug",
            "refresh_interval",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
