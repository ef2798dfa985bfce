"""State threaded explicitly through one rebuild of a view."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from git_status_tree.config import Config
from git_status_tree.models.section import SectionKind
from git_status_tree.services.git_runner import GitRunner


@dataclass
class RefreshContext:
    """Everything an inserter may consult while emitting sections.

    ``cache`` lets inserters of the same rebuild share git output (the
    branch view lists branches once for its local and remote groups).
    """
    runner: GitRunner
    config: Config
    generation: int
    hidden_defaults: Mapping[SectionKind, bool] = field(default_factory=dict)
    diagnostics: List[str] = field(default_factory=list)
    cache: Dict[str, Any] = field(default_factory=dict)

    @property
    def repo_path(self) -> str:
        return self.runner.repo_path

    def cached(self, name: str, compute):
        """Return ``cache[name]``, computing it on first use."""
        if name not in self.cache:
            self.cache[name] = compute()
        return self.cache[name]
