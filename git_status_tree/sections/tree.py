"""Arena holding every section of one tree generation."""

from bisect import bisect_right
from typing import Dict, Iterator, List, Optional

from git_status_tree.models.section import Section, SectionKey, Span
from git_status_tree.sections.buffer import RenderedBuffer
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)


class SectionTree:
    """All sections produced by one rebuild, plus the text they cover.

    Sections reference each other through arena indices only. Index 0 is
    always the root.
    """

    def __init__(self, generation: int, buffer: Optional[RenderedBuffer] = None):
        self.generation = generation
        self.sections: List[Section] = []
        self.buffer = buffer if buffer is not None else RenderedBuffer()
        self._key_index: Optional[Dict[SectionKey, Section]] = None

    def __len__(self) -> int:
        return len(self.sections)

    @property
    def root(self) -> Section:
        return self.sections[0]

    @property
    def text(self) -> str:
        return self.buffer.plain

    def add(self, section: Section) -> Section:
        """Store a new section; its index must be the next free slot."""
        assert section.index == len(self.sections), "arena indices must be dense"
        self.sections.append(section)
        self._key_index = None
        return section

    def truncate(self, length: int) -> None:
        """Forget sections at index ``length`` and beyond."""
        del self.sections[length:]
        self._key_index = None

    def get(self, index: int) -> Section:
        return self.sections[index]

    def parent_of(self, section: Section) -> Optional[Section]:
        if section.parent is None:
            return None
        return self.sections[section.parent]

    def children_of(self, section: Section) -> List[Section]:
        return [self.sections[i] for i in section.children]

    def ancestors(self, section: Section) -> Iterator[Section]:
        """Yield the parent, grandparent, ... up to the root."""
        parent = self.parent_of(section)
        while parent is not None:
            yield parent
            parent = self.parent_of(parent)

    def walk(self, section: Optional[Section] = None) -> Iterator[Section]:
        """Yield ``section`` and all its descendants in document order."""
        if not self.sections:
            return
        stack = [section if section is not None else self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(self.sections[i] for i in reversed(node.children))

    def key_index(self) -> Dict[SectionKey, Section]:
        """Map each key path to its section (first occurrence wins)."""
        if self._key_index is None:
            index: Dict[SectionKey, Section] = {}
            for node in self.walk():
                if node.key in index:
                    logger.debug(f"Duplicate section key {node.key}; keeping the first one")
                    continue
                index[node.key] = node
            self._key_index = index
        return self._key_index

    def find(self, key: SectionKey) -> Optional[Section]:
        return self.key_index().get(tuple(key))

    def is_visible(self, section: Section) -> bool:
        """True when no ancestor hides this section."""
        return not any(ancestor.hidden for ancestor in self.ancestors(section))

    def section_at(self, offset: int) -> Section:
        """Return the deepest section whose span covers ``offset``.

        Offsets past the end of the buffer resolve to the last position.
        """
        if not self.sections:
            raise LookupError("empty section tree")
        length = len(self.buffer)
        if length:
            offset = max(0, min(offset, length - 1))
        else:
            offset = 0

        node = self.root
        while node.children:
            children = self.children_of(node)
            starts = [child.start for child in children]
            position = bisect_right(starts, offset) - 1
            if position < 0 or not children[position].span.contains(offset):
                break
            node = children[position]
        return node

    def splice(self, position: int, buffer: RenderedBuffer, owner: Section, first_new: int) -> None:
        """Insert text produced for ``owner`` at ``position``.

        Sections created before ``first_new`` are shifted; sections from
        ``first_new`` on already carry absolute offsets.
        """
        delta = len(buffer)
        if delta:
            for node in self.sections[:first_new]:
                if node is owner:
                    continue
                node.shift(position, delta)
            owner.body_span = Span(owner.body_span.start, owner.body_span.end + delta)
            self.buffer.splice(position, buffer)
        self._key_index = None
