"""Rebuild-and-reconcile cycle shared by every section view."""

from typing import Callable, List, Optional, Sequence

from git_status_tree.config import Config
from git_status_tree.constants import ERROR_MARKER, ERROR_STYLE
from git_status_tree.display import visible_text
from git_status_tree.exceptions import UnbalancedSectionError, format_key
from git_status_tree.models.section import Section
from git_status_tree.sections.builder import SectionBuilder
from git_status_tree.sections.reconciler import capture_cursor, reconcile
from git_status_tree.sections.tree import SectionTree
from git_status_tree.sections.washer import expand_section
from git_status_tree.services.git_runner import GitRunner
from git_status_tree.utils.logging import ViewLogger, get_logger
from git_status_tree.views.context import RefreshContext

logger = get_logger(__name__)

Inserter = Callable[[SectionBuilder, RefreshContext], None]


def inserter_name(inserter: Inserter) -> str:
    return getattr(inserter, "__name__", repr(inserter))


class SectionView:
    """A buffer of sections rebuilt from git output on every refresh.

    The tree is never patched in place by a refresh: a new tree is built
    from scratch by running ``inserters`` in order, and the fold state and
    cursor of the previous tree are carried over by key path.
    """

    title = "view"

    def __init__(
        self,
        runner: GitRunner,
        config: Optional[Config] = None,
        inserters: Optional[Sequence[Inserter]] = None,
    ):
        """Initialize the view.

        Args:
            runner: Git runner bound to the repository shown
            config: Configuration (fold policy, status layout, limits)
            inserters: Content steps in display order; defaults to the view's own
        """
        self.runner = runner
        self.config = config or Config(repo_path=runner.repo_path)
        self.hidden_defaults = self.config.section_hidden_defaults()
        self.inserters: List[Inserter] = list(
            inserters if inserters is not None else self.default_inserters()
        )
        self.tree: Optional[SectionTree] = None
        self.generation = 0
        self.point = 0
        self.diagnostics: List[str] = []
        self.log = ViewLogger(logger, self)

    def default_inserters(self) -> List[Inserter]:
        return []

    def refresh(self) -> SectionTree:
        """Rebuild the tree and restore fold state and cursor."""
        anchor = capture_cursor(self.tree, self.point)
        previous = self.tree
        self.generation += 1
        context = RefreshContext(
            runner=self.runner,
            config=self.config,
            generation=self.generation,
            hidden_defaults=self.hidden_defaults,
        )
        builder = SectionBuilder(self.generation, self.hidden_defaults)
        for inserter in self.inserters:
            self._run_inserter(inserter, builder, context)
        tree = builder.finish()

        result = reconcile(previous, tree, anchor, self.hidden_defaults)
        self.tree = tree
        self.point = result.offset
        self.diagnostics = context.diagnostics
        self.log.debug(f"Refreshed: {len(tree)} sections, {result.matched} matched")
        self.log.diagnostics(self.diagnostics)
        return tree

    def _run_inserter(self, inserter: Inserter, builder: SectionBuilder, context: RefreshContext) -> None:
        """Run one inserter; on failure drop its output and leave an error line instead."""
        name = inserter_name(inserter)
        checkpoint = builder.checkpoint()
        try:
            inserter(builder, context)
            if builder.depth != len(checkpoint.stack):
                raise UnbalancedSectionError(
                    f"{name} left {format_key(builder.current.key)} open",
                    key=builder.current.key,
                )
        except Exception as e:
            self.log.error(f"Inserter {name} failed: {e}")
            builder.rollback(checkpoint)
            builder.insert(f"{ERROR_MARKER} {name}: {e}\n", ERROR_STYLE)
            context.diagnostics.append(f"{name}: {e}")

    def _require_tree(self) -> SectionTree:
        if self.tree is None:
            self.refresh()
        return self.tree

    def section_at(self, offset: Optional[int] = None) -> Section:
        """Innermost section containing ``offset`` (default: point)."""
        tree = self._require_tree()
        return tree.section_at(self.point if offset is None else offset)

    def expand(self, section: Section) -> List[Section]:
        """Show ``section``, running deferred bodies that become visible."""
        tree = self._require_tree()
        return expand_section(tree, section, self.generation, self.hidden_defaults)

    def collapse(self, section: Section) -> bool:
        """Hide the body of ``section``; point inside it moves to its start."""
        if not section.collapsible or section.hidden:
            return False
        section.hidden = True
        if section.body_span.start <= self.point < section.end:
            self.point = section.start
        return True

    def toggle(self, offset: Optional[int] = None) -> Optional[Section]:
        """Toggle the nearest collapsible section at ``offset`` (default: point)."""
        tree = self._require_tree()
        section = self.section_at(offset)
        while not section.collapsible:
            section = tree.parent_of(section)
            if section is None:
                return None
        if section.hidden:
            self.expand(section)
        else:
            self.collapse(section)
        return section

    def visible_text(self) -> str:
        """Plain text of the buffer with hidden bodies left out."""
        return visible_text(self._require_tree())

    def run_async(self, args: Sequence[str]) -> int:
        """Run git in the background and refresh once it finished.

        A completion that arrives after a rebuild still refreshes the view.
        """
        generation = self.generation

        def on_complete(exit_code: int) -> None:
            if generation != self.generation:
                self.log.debug(f"git {' '.join(args)} finished after a rebuild (started at #{generation})")
            self.refresh()
            if exit_code != 0:
                self.diagnostics.append(f"git {' '.join(args)} exited with {exit_code}")

        return self.runner.run_async(list(args), on_complete)
