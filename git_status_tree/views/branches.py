"""The branch view: local branches, remote branches and tags.

Branch sections are collapsed by default. Their body (the branch
description and the commits ``git cherry`` reports as not yet in HEAD) is
computed by a washer the first time a branch is expanded, since running
``git cherry`` for every branch on every refresh is expensive.
"""

from collections import OrderedDict
from typing import Dict, List, Optional

from git_status_tree.constants import SYMBOL_CHERRY_NEW, Style
from git_status_tree.exceptions import GitCommandError
from git_status_tree.formatters.branch import format_branch_heading
from git_status_tree.formatters.refs import format_commit_line, format_tag
from git_status_tree.models.records import BranchRecord
from git_status_tree.models.section import SectionKind
from git_status_tree.parsers.branches import parse_branch_lines
from git_status_tree.parsers.log import parse_cherry_lines
from git_status_tree.parsers.tags import parse_count, parse_tag_lines
from git_status_tree.sections.builder import SectionBuilder, WasherFn
from git_status_tree.utils.logging import get_logger
from git_status_tree.views.base import Inserter, SectionView
from git_status_tree.views.context import RefreshContext

logger = get_logger(__name__)


def branch_records(ctx: RefreshContext) -> List[BranchRecord]:
    """All local and remote-tracking branches, listed once per rebuild."""
    return ctx.cached(
        "branches",
        lambda: parse_branch_lines(
            ctx.runner.lines(["branch", "--all", "-vv", "--no-color"]),
            ctx.diagnostics,
        ),
    )


def _name_width(branches: List[BranchRecord]) -> int:
    return max((len(branch.short_name or "(detached)") for branch in branches), default=0)


def cherry_washer(ctx: RefreshContext, branch: BranchRecord) -> WasherFn:
    """Washer listing the description and unmerged commits of ``branch``."""
    ref = branch.name

    def wash(builder: SectionBuilder) -> None:
        if branch.remote is None:
            description = ctx.runner.value(["config", f"branch.{ref}.description"])
            if description:
                with builder.section(SectionKind.BRANCH_DESCRIPTION, ref, collapsible=False):
                    builder.insert(f"    {description}\n", Style.DIMMED)

        args = ["cherry", "-v", "--abbrev=7", "HEAD", ref]
        status, lines = ctx.runner.run(args)
        if status != 0:
            raise GitCommandError(args, status)
        commits = parse_cherry_lines(lines, ctx.diagnostics)
        if not commits:
            builder.insert("    (no commits missing from HEAD)\n", Style.DIMMED)
        for commit in commits:
            with builder.section(SectionKind.COMMIT, commit.hash, collapsible=False, payload=commit):
                style = Style.BRANCH_LOCAL if commit.cherry == SYMBOL_CHERRY_NEW else Style.DIMMED
                builder.insert("    ")
                builder.insert(format_commit_line(commit.hash, commit.subject, commit.cherry), style)

    return wash


def _insert_branch(builder: SectionBuilder, ctx: RefreshContext, branch: BranchRecord, width: int) -> None:
    heading = format_branch_heading(branch, width)
    if branch.is_symbolic:
        with builder.section(SectionKind.BRANCH, branch.short_name, heading, collapsible=False,
                             heading_style=Style.DIMMED, payload=branch):
            pass
        return

    if branch.current:
        style = Style.BRANCH_CURRENT
    elif branch.remote:
        style = Style.BRANCH_REMOTE
    else:
        style = Style.BRANCH_LOCAL
    value = branch.short_name if branch.name is not None else "HEAD"
    with builder.section(SectionKind.BRANCH, value, heading, heading_style=style, payload=branch) as section:
        if branch.name is not None:
            builder.set_washer(cherry_washer(ctx, branch), section)


def insert_local_branches(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Local branches, the current one marked."""
    branches = [branch for branch in branch_records(ctx) if branch.remote is None]
    if not branches:
        return
    width = _name_width(branches)
    with builder.section(SectionKind.GENERIC, "local", "Branches\n", heading_style=Style.SECTION_HEADING):
        for branch in branches:
            _insert_branch(builder, ctx, branch, width)
        builder.insert("\n")


def insert_remote_branches(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """One section per remote with its remote-tracking branches."""
    remotes: Dict[str, List[BranchRecord]] = OrderedDict(
        (name, []) for name in ctx.runner.lines(["remote"]) if name
    )
    for branch in branch_records(ctx):
        if branch.remote is not None:
            remotes.setdefault(branch.remote, []).append(branch)

    for remote, branches in remotes.items():
        url = ctx.runner.value(["remote", "get-url", remote])
        heading = f"Remote {remote}" + (f" ({url})" if url else "") + "\n"
        width = _name_width(branches)
        with builder.section(SectionKind.REMOTE, remote, heading, heading_style=Style.SECTION_HEADING):
            for branch in branches:
                _insert_branch(builder, ctx, branch, width)
            builder.insert("\n")


def tags_washer(ctx: RefreshContext, reference: str = "HEAD") -> WasherFn:
    """Washer listing tags with the number of commits since each one."""

    def wash(builder: SectionBuilder) -> None:
        tags = parse_tag_lines(
            ctx.runner.lines(["tag", "--list", "--sort=-creatordate"]),
            ctx.diagnostics,
        )
        if not tags:
            builder.insert("  (no tags)\n", Style.DIMMED)
        for tag in tags:
            tag.count = parse_count(ctx.runner.value(["rev-list", "--count", f"{tag.name}..{reference}"]) or "")
            with builder.section(SectionKind.TAG, tag.name, collapsible=False, payload=tag):
                builder.insert("  ")
                builder.insert(format_tag(tag), Style.TAG)
                builder.insert("\n")

    return wash


def insert_tags(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Tags, counted against HEAD only when the group is expanded."""
    if not ctx.runner.lines(["tag", "--list"]):
        return
    with builder.section(SectionKind.GENERIC, "tags", "Tags\n", hidden=True,
                         heading_style=Style.SECTION_HEADING) as section:
        builder.set_washer(tags_washer(ctx), section)


BRANCH_INSERTERS: List[Inserter] = [
    insert_local_branches,
    insert_remote_branches,
    insert_tags,
]


class BranchView(SectionView):
    """Section view of branches, remotes and tags."""

    title = "branches"

    def default_inserters(self) -> List[Inserter]:
        return list(BRANCH_INSERTERS)

    def branch_at(self, offset: Optional[int] = None) -> Optional[BranchRecord]:
        """Branch record of the branch section at ``offset`` (default: point)."""
        tree = self._require_tree()
        section = tree.section_at(self.point if offset is None else offset)
        for node in [section, *tree.ancestors(section)]:
            if node.kind == SectionKind.BRANCH:
                return node.payload
        return None
