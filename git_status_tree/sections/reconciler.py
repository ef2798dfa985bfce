"""Carry fold state and cursor position from one tree generation to the next.

Sections are rebuilt from scratch on every refresh, so they cannot be matched
by identity. They are matched by key path instead: the (kind, value) pairs
from the root down to the section.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from git_status_tree.models.section import Section, SectionKey, SectionKind
from git_status_tree.sections.tree import SectionTree
from git_status_tree.sections.washer import wash_visible
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CursorAnchor:
    """Cursor position expressed relative to the section containing it."""
    key: SectionKey
    relative: int


@dataclass
class ReconcileResult:
    """Outcome of reconciling a fresh tree with its predecessor."""
    offset: int = 0
    matched: int = 0
    washed: List[Section] = field(default_factory=list)


def capture_cursor(tree: Optional[SectionTree], offset: int) -> Optional[CursorAnchor]:
    """Record where point is, in terms that survive a rebuild."""
    if tree is None or not len(tree):
        return None
    section = tree.section_at(offset)
    return CursorAnchor(key=section.key, relative=max(offset - section.start, 0))


def copy_fold_state(
    previous: Optional[SectionTree],
    current: SectionTree,
    below: Optional[Section] = None,
) -> int:
    """Copy ``hidden`` from sections of ``previous`` with the same key path.

    With ``below`` only its descendants are visited. Unmatched sections keep
    the default the builder gave them. Returns the number of matched sections.
    """
    if previous is None or not len(previous):
        return 0
    index = previous.key_index()
    matched = 0
    for node in current.walk(below):
        if node is below:
            continue
        old = index.get(node.key)
        if old is None:
            continue
        matched += 1
        if node.collapsible:
            node.hidden = old.hidden
    return matched


def _visible_anchor(tree: SectionTree, section: Section) -> Section:
    """Outermost hidden ancestor's section, or ``section`` when visible."""
    if tree.is_visible(section):
        return section
    target = section
    for ancestor in tree.ancestors(section):
        if ancestor.hidden:
            target = ancestor
    return target


def restore_cursor(tree: SectionTree, anchor: Optional[CursorAnchor]) -> int:
    """Translate a CursorAnchor into an offset of ``tree``.

    Falls back to the nearest ancestor key still present; the relative
    offset is clamped to the section's new length.
    """
    if anchor is None or not len(tree):
        return 0
    key = tuple(anchor.key)
    section = None
    while key:
        section = tree.find(key)
        if section is not None:
            break
        key = key[:-1]
    if section is None:
        return 0

    visible = _visible_anchor(tree, section)
    if visible is not section:
        return visible.start
    length = len(section.span)
    return section.start + min(anchor.relative, max(length - 1, 0))


def reconcile(
    previous: Optional[SectionTree],
    current: SectionTree,
    cursor: Optional[CursorAnchor] = None,
    hidden_defaults: Optional[Mapping[SectionKind, bool]] = None,
) -> ReconcileResult:
    """Restore fold state and cursor on a freshly built tree.

    Expanded sections whose body was deferred get their washer run so that a
    section the user opened stays open with content after a refresh. The
    sections a washer creates get their fold state copied as well.
    """
    result = ReconcileResult()
    result.matched = copy_fold_state(previous, current)

    def restore_washed(section: Section) -> None:
        result.matched += copy_fold_state(previous, current, section)

    result.washed = wash_visible(
        current,
        generation=current.generation,
        hidden_defaults=hidden_defaults,
        after_wash=restore_washed,
    )
    result.offset = restore_cursor(current, cursor)
    logger.debug(
        f"Reconciled generation {current.generation}: {result.matched} sections matched, "
        f"{len(result.washed)} washed, cursor at {result.offset}"
    )
    return result
