"""Section model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple


class SectionKind(Enum):
    """Kind of a section in the rendered tree."""
    ROOT = "root"
    STATUS = "status"
    BRANCH = "branch"
    REMOTE = "remote"
    TAG = "tag"
    STASH = "stash"
    UNTRACKED_GROUP = "untracked-group"
    FILE = "file"
    HUNK = "hunk"
    COMMIT = "commit"
    BRANCH_DESCRIPTION = "branch-description"
    MERGE_LOG = "merge-log"
    GENERIC = "generic"


# Identity of a section across rebuilds: the (kind, value) pairs from the root
SectionKey = Tuple[Tuple[SectionKind, Any], ...]


@dataclass(frozen=True)
class Span:
    """Half-open character range [start, end) in the rendered buffer."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def covers(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end

    def shifted(self, position: int, delta: int) -> "Span":
        """Move every boundary at or after ``position`` by ``delta``."""
        start = self.start + delta if self.start >= position else self.start
        end = self.end + delta if self.end >= position else self.end
        return Span(start, end)


class WasherState(Enum):
    """Construction state of a section body."""
    EAGER = "eager"        # Body present (built eagerly or already washed)
    DEFERRED = "deferred"  # Body will be built on first expansion
    FAILED = "failed"      # Deferred build raised; partial body kept


@dataclass
class Washer:
    """Deferred builder attached to a collapsible section."""
    state: WasherState = WasherState.EAGER
    closure: Optional[Callable[..., None]] = None
    generation: int = 0
    runs: int = 0

    @classmethod
    def deferred(cls, closure: Callable[..., None], generation: int) -> "Washer":
        return cls(state=WasherState.DEFERRED, closure=closure, generation=generation)

    @property
    def pending(self) -> bool:
        return self.state == WasherState.DEFERRED

    def settle(self, failed: bool = False) -> None:
        """Collapse to a terminal state; the closure is never kept after a run."""
        self.state = WasherState.FAILED if failed else WasherState.EAGER
        self.closure = None


@dataclass
class Section:
    """A node of the section tree.

    Sections live in the arena of a SectionTree; ``parent`` and ``children``
    are arena indices, never object references.
    """
    kind: SectionKind
    value: Any
    key: SectionKey
    index: int
    generation: int
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    heading_span: Span = Span(0, 0)
    body_span: Span = Span(0, 0)
    hidden: bool = False
    collapsible: bool = True
    washer: Washer = field(default_factory=Washer)
    payload: Any = None  # Parsed record the section was built from

    @property
    def span(self) -> Span:
        """Full extent of the section, heading included."""
        return Span(self.heading_span.start, self.body_span.end)

    @property
    def start(self) -> int:
        return self.heading_span.start

    @property
    def end(self) -> int:
        return self.body_span.end

    @property
    def deferred(self) -> bool:
        return self.washer.pending

    def shift(self, position: int, delta: int) -> None:
        self.heading_span = self.heading_span.shifted(position, delta)
        self.body_span = self.body_span.shifted(position, delta)

    def __repr__(self) -> str:
        return f"Section({self.kind.value} {self.value!r} {self.start}-{self.end})"
