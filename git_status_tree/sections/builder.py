"""Construction API used by section inserters while emitting content."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Set, Tuple

from git_status_tree.exceptions import SectionError, UnbalancedSectionError, format_key
from git_status_tree.models.section import Section, SectionKey, SectionKind, Span, Washer
from git_status_tree.sections.buffer import RenderedBuffer
from git_status_tree.sections.tree import SectionTree
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)

WasherFn = Callable[["SectionBuilder"], None]


@dataclass
class Checkpoint:
    """Builder state to roll back to when a content step fails."""
    arena_length: int
    buffer_length: int
    stack: List[Section]
    heading_spans: List[Span]
    body_starts: List[int]


class SectionBuilder:
    """Emit sections and their text into a SectionTree.

    A builder either creates a fresh tree (``SectionBuilder(generation)``) or
    extends an existing section in place (``SectionBuilder.for_washer``). In
    both modes sections are well nested: every ``begin_section`` must be
    matched by an ``end_section`` of the same handle, innermost first.
    """

    def __init__(
        self,
        generation: int = 0,
        hidden_defaults: Optional[Mapping[SectionKind, bool]] = None,
        *,
        tree: Optional[SectionTree] = None,
        owner: Optional[Section] = None,
    ):
        self.hidden_defaults: Mapping[SectionKind, bool] = hidden_defaults or {}
        self._body_starts: Dict[int, int] = {}
        self._child_keys: Dict[int, Set[Tuple[SectionKind, Any]]] = {}
        self._finished = False
        self._owner_children = 0

        if owner is None:
            self.tree = SectionTree(generation)
            self.buffer = self.tree.buffer
            self._base = 0
            self._owner: Optional[Section] = None
            self._first_new = 0
            root = self._new_section(SectionKind.ROOT, None, parent=None, collapsible=False, hidden=False)
            self._stack: List[Section] = [root]
        else:
            assert tree is not None, "splice mode needs the owning tree"
            self.tree = tree
            self.buffer = RenderedBuffer()
            self._base = owner.heading_span.end
            self._owner = owner
            self._first_new = len(tree)
            self._stack = [owner]
            self._body_starts[owner.index] = owner.body_span.start
            self._child_keys[owner.index] = {self.tree.get(i).key[-1] for i in owner.children}

    @classmethod
    def for_washer(
        cls,
        tree: SectionTree,
        owner: Section,
        hidden_defaults: Optional[Mapping[SectionKind, bool]] = None,
    ) -> "SectionBuilder":
        """Builder appending content directly after ``owner``'s heading."""
        return cls(tree.generation, hidden_defaults, tree=tree, owner=owner)

    @property
    def offset(self) -> int:
        """Absolute offset of the next write."""
        return self._base + len(self.buffer)

    @property
    def current(self) -> Section:
        """Innermost open section."""
        return self._stack[-1]

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _new_section(
        self,
        kind: SectionKind,
        value: Any,
        parent: Optional[Section],
        collapsible: bool,
        hidden: bool,
        payload: Any = None,
    ) -> Section:
        key: SectionKey = parent.key + ((kind, value),) if parent else ()
        position = self.offset
        section = Section(
            kind=kind,
            value=value,
            key=key,
            index=len(self.tree),
            generation=self.tree.generation,
            parent=parent.index if parent else None,
            heading_span=Span(position, position),
            body_span=Span(position, position),
            hidden=hidden,
            collapsible=collapsible,
            payload=payload,
        )
        self.tree.add(section)
        if parent is not None:
            siblings = self._child_keys.setdefault(parent.index, set())
            if (kind, value) in siblings:
                logger.debug(f"Duplicate sibling key {format_key(key)}")
            siblings.add((kind, value))
            if parent is self._owner:
                # Washer output lands before any body the owner already had
                parent.children.insert(self._owner_children, section.index)
                self._owner_children += 1
            else:
                parent.children.append(section.index)
        self._body_starts[section.index] = position
        return section

    def begin_section(
        self,
        kind: SectionKind,
        value: Any = None,
        collapsible: bool = True,
        hidden: Optional[bool] = None,
        payload: Any = None,
    ) -> Section:
        """Open a child of the innermost open section and return its handle."""
        self._check_open()
        if not collapsible:
            hidden = False
        elif hidden is None:
            hidden = self.hidden_defaults.get(kind, False)
        section = self._new_section(kind, value, self.current, collapsible, hidden, payload)
        self._stack.append(section)
        return section

    def end_section(self, handle: Section) -> Section:
        """Close ``handle``, which must be the innermost open section."""
        self._check_open()
        if len(self._stack) == 1 or self._stack[-1] is not handle:
            raise UnbalancedSectionError(
                f"Cannot end section {format_key(handle.key)}: innermost open section is "
                f"{format_key(self.current.key)}",
                key=handle.key,
            )
        self._stack.pop()
        self._close(handle)
        return handle

    def _close(self, section: Section) -> None:
        body_start = self._body_starts.pop(section.index, section.heading_span.end)
        section.body_span = Span(body_start, self.offset)

    @contextmanager
    def section(
        self,
        kind: SectionKind,
        value: Any = None,
        heading: Optional[str] = None,
        *,
        collapsible: bool = True,
        hidden: Optional[bool] = None,
        heading_style: Optional[str] = None,
        payload: Any = None,
    ) -> Iterator[Section]:
        """Context manager wrapping begin_section/end_section."""
        handle = self.begin_section(kind, value, collapsible=collapsible, hidden=hidden, payload=payload)
        if heading is not None:
            self.set_heading(heading, heading_style)
        yield handle
        self.end_section(handle)

    def set_heading(self, text: str, style: Optional[str] = None) -> None:
        """Write the heading of the innermost section; must precede its body."""
        self._check_open()
        section = self.current
        if section.kind == SectionKind.ROOT or self.offset != section.start or section.children:
            raise SectionError(f"Heading of {format_key(section.key)} must be written before its body")
        start = self.offset
        self.buffer.append(text, style)
        section.heading_span = Span(start, self.offset)
        self._body_starts[section.index] = self.offset

    def insert(self, text: str, style: Optional[str] = None) -> None:
        """Write body text into the innermost open section."""
        self._check_open()
        self.buffer.append(text, style)

    def set_washer(self, fn: WasherFn, handle: Optional[Section] = None) -> None:
        """Defer the body of ``handle`` (default: innermost) until it is expanded."""
        section = handle if handle is not None else self.current
        if not section.collapsible:
            raise SectionError(f"Section {format_key(section.key)} is not collapsible and cannot be deferred")
        if not len(section.heading_span):
            raise SectionError(f"Deferred section {format_key(section.key)} needs a heading")
        section.washer = Washer.deferred(fn, self.tree.generation)

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(
            arena_length=len(self.tree),
            buffer_length=len(self.buffer),
            stack=list(self._stack),
            heading_spans=[s.heading_span for s in self._stack],
            body_starts=[self._body_starts.get(s.index, s.heading_span.end) for s in self._stack],
        )

    def rollback(self, checkpoint: Checkpoint) -> None:
        """Discard every section and byte emitted since ``checkpoint``."""
        for index in range(checkpoint.arena_length, len(self.tree)):
            self._body_starts.pop(index, None)
            self._child_keys.pop(index, None)
        self.tree.truncate(checkpoint.arena_length)
        self.buffer.truncate(checkpoint.buffer_length)
        self._stack = list(checkpoint.stack)
        for section, heading, body_start in zip(self._stack, checkpoint.heading_spans, checkpoint.body_starts):
            section.children = [i for i in section.children if i < checkpoint.arena_length]
            section.heading_span = heading
            self._body_starts[section.index] = body_start
            self._child_keys[section.index] = {self.tree.get(i).key[-1] for i in section.children}
        if self._owner is not None:
            self._owner_children = sum(1 for i in self._owner.children if i >= self._first_new)

    def close_open_sections(self) -> List[Section]:
        """End every open section above the base one, returning them."""
        closed = []
        while len(self._stack) > 1:
            section = self._stack.pop()
            self._close(section)
            closed.append(section)
        return closed

    def finish(self) -> SectionTree:
        """Close the base section and return the tree.

        In washer mode the produced text is spliced into the owning tree.
        """
        self._check_open()
        if len(self._stack) > 1:
            open_keys = ", ".join(format_key(s.key) for s in self._stack[1:])
            raise UnbalancedSectionError(f"Sections left open: {open_keys}", key=self._stack[-1].key)
        self._finished = True

        if self._owner is None:
            self._close(self.tree.root)
            return self.tree

        self.tree.splice(self._base, self.buffer, self._owner, self._first_new)
        return self.tree

    def _check_open(self) -> None:
        if self._finished:
            raise SectionError("Builder already finished")
