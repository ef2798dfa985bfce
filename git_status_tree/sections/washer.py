"""Deferred construction of section bodies.

A collapsible section may carry a washer instead of an eager body. The
washer runs the first time the section is shown, appending its content right
after the heading, and then collapses to the EAGER state (or FAILED). It is
never run twice for the same tree, and never against a tree generation other
than the one it was created for.
"""

from typing import Callable, List, Mapping, Optional

from git_status_tree.constants import ERROR_MARKER, ERROR_STYLE
from git_status_tree.exceptions import WasherError
from git_status_tree.models.section import Section, SectionKind
from git_status_tree.sections.builder import SectionBuilder
from git_status_tree.sections.tree import SectionTree
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)


def run_washer(
    tree: SectionTree,
    section: Section,
    generation: Optional[int] = None,
    hidden_defaults: Optional[Mapping[SectionKind, bool]] = None,
) -> bool:
    """Materialize the deferred body of ``section``.

    Args:
        tree: Tree owning the section
        section: Section whose washer should run
        generation: Generation the caller currently displays; defaults to the tree's
        hidden_defaults: Per-kind fold policy for sections the washer creates

    Returns:
        True if the washer ran (successfully or not), False if there was
        nothing to run or the washer belongs to another generation.
    """
    washer = section.washer
    if not washer.pending:
        return False

    current = tree.generation if generation is None else generation
    if washer.generation != current or section.generation != current or tree.generation != current:
        logger.debug(
            f"Dropping stale washer for {section!r} "
            f"(washer generation {washer.generation}, current {current})"
        )
        return False

    closure = washer.closure
    washer.runs += 1
    builder = SectionBuilder.for_washer(tree, section, hidden_defaults)
    try:
        closure(builder)
        builder.finish()
    except Exception as e:
        error = WasherError(section.key, e)
        logger.warning(str(error))
        builder.close_open_sections()
        builder.insert(f"  {ERROR_MARKER} {e}\n", ERROR_STYLE)
        builder.finish()
        washer.settle(failed=True)
        section.hidden = False
        return True

    washer.settle()
    logger.debug(f"Washed {section!r}")
    return True


def expand_section(
    tree: SectionTree,
    section: Section,
    generation: Optional[int] = None,
    hidden_defaults: Optional[Mapping[SectionKind, bool]] = None,
) -> List[Section]:
    """Show ``section`` and build every deferred body that becomes visible.

    Returns the sections whose washers ran.
    """
    current = tree.generation if generation is None else generation
    if section.generation != current or tree.generation != current:
        logger.debug(f"Ignoring expansion of {section!r} from stale generation {section.generation}")
        return []
    section.hidden = False
    return wash_visible(tree, section, generation, hidden_defaults)


def wash_visible(
    tree: SectionTree,
    start: Optional[Section] = None,
    generation: Optional[int] = None,
    hidden_defaults: Optional[Mapping[SectionKind, bool]] = None,
    after_wash: Optional[Callable[[Section], None]] = None,
) -> List[Section]:
    """Run pending washers of expanded sections under ``start``.

    Hidden sections are neither washed nor descended into. ``after_wash`` is
    called with each washed section before its new children are visited.
    """
    washed: List[Section] = []
    if not len(tree):
        return washed
    stack = [start if start is not None else tree.root]
    while stack:
        node = stack.pop()
        if node.hidden:
            continue
        if node.deferred and run_washer(tree, node, generation, hidden_defaults):
            washed.append(node)
            if after_wash is not None:
                after_wash(node)
        stack.extend(tree.get(i) for i in reversed(node.children))
    return washed
