"""The status view: working tree, index, stashes and upstream state."""

import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from git_status_tree.constants import Style
from git_status_tree.exceptions import MalformedLineError
from git_status_tree.formatters.refs import format_stash, format_tag
from git_status_tree.formatters.status import format_file_diff_heading
from git_status_tree.models.records import DiffLineKind, FileDiff, HunkRecord, StashRecord
from git_status_tree.models.section import Section, SectionKind
from git_status_tree.parsers.diff import parse_diff
from git_status_tree.parsers.log import parse_log_lines
from git_status_tree.parsers.stashes import parse_stash_lines
from git_status_tree.parsers.status import parse_status_lines
from git_status_tree.parsers.tags import parse_describe
from git_status_tree.sections.builder import SectionBuilder
from git_status_tree.sections.hunk_mapper import hunk_target
from git_status_tree.utils.logging import get_logger
from git_status_tree.views.base import Inserter, SectionView
from git_status_tree.views.context import RefreshContext

logger = get_logger(__name__)

LINE_STYLES = {
    DiffLineKind.ADDED: Style.DIFF_ADDED,
    DiffLineKind.REMOVED: Style.DIFF_REMOVED,
    DiffLineKind.CONTEXT: Style.DIFF_CONTEXT,
}

# Marker files in the git directory and the operation they indicate
REPOSITORY_STATES = [
    ("rebase-merge", "Rebasing"),
    ("rebase-apply", "Rebasing"),
    ("MERGE_HEAD", "Merging"),
    ("CHERRY_PICK_HEAD", "Cherry-picking"),
    ("REVERT_HEAD", "Reverting"),
    ("BISECT_LOG", "Bisecting"),
]


@dataclass
class VisitTarget:
    """File position a cursor inside a diff refers to."""
    path: str
    line: int
    column: int = 0


def _label(text: str) -> str:
    return f"{text + ':':<10}"


def repository_state(ctx: RefreshContext) -> Optional[str]:
    """Name of the operation in progress (rebase, merge, ...), if any."""
    git_dir = ctx.runner.value(["rev-parse", "--git-dir"])
    if git_dir is None:
        return None
    git_dir = os.path.join(ctx.repo_path, git_dir)
    for marker, state in REPOSITORY_STATES:
        if os.path.exists(os.path.join(git_dir, marker)):
            return state
    return None


def insert_headers(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Local branch, upstream, HEAD commit and nearest tag."""
    runner = ctx.runner
    branch = runner.value(["symbolic-ref", "--short", "-q", "HEAD"])
    head = parse_log_lines(runner.lines(["log", "-1", "--no-color", "--format=%h %s"]), ctx.diagnostics)

    with builder.section(SectionKind.STATUS, "headers", collapsible=False):
        builder.insert(_label("Local"))
        builder.insert(branch or "(detached)", Style.BRANCH_CURRENT)
        builder.insert(f" {os.path.abspath(ctx.repo_path)}\n")

        if branch:
            remote = runner.value(["config", f"branch.{branch}.remote"])
            merge = runner.value(["config", f"branch.{branch}.merge"])
            if remote and merge:
                upstream = merge[len("refs/heads/"):] if merge.startswith("refs/heads/") else merge
                url = runner.value(["remote", "get-url", remote]) or ""
                builder.insert(_label("Remote"))
                builder.insert(f"{upstream} @ {remote}", Style.BRANCH_REMOTE)
                builder.insert(f" {url}\n" if url else "\n")

        builder.insert(_label("Head"))
        if head:
            builder.insert(head[0].hash, Style.HASH)
            builder.insert(f" {head[0].subject}\n")
        else:
            builder.insert("nothing committed yet\n", Style.DIMMED)

        describe = runner.value(["describe", "--long", "--tags"])
        if describe:
            try:
                tag = parse_describe(describe)
            except MalformedLineError as e:
                logger.warning(str(e))
                ctx.diagnostics.append(str(e))
                tag = None
            if tag is not None:
                builder.insert(_label("Tag"))
                builder.insert(format_tag(tag), Style.TAG)
                builder.insert("\n")

        state = repository_state(ctx)
        if state:
            builder.insert(_label("State"))
            builder.insert(f"{state}\n", Style.WARNING)
        builder.insert("\n")


def _insert_commits(
    builder: SectionBuilder,
    ctx: RefreshContext,
    kind: SectionKind,
    value: str,
    heading: str,
    revision_range: str,
) -> None:
    lines = ctx.runner.lines([
        "log",
        "--no-color",
        "--format=%h %s",
        f"--max-count={ctx.config.log_limit}",
        revision_range,
    ])
    commits = parse_log_lines(lines, ctx.diagnostics)
    if not commits:
        return
    with builder.section(kind, value, f"{heading} ({len(commits)})\n", heading_style=Style.SECTION_HEADING):
        for commit in commits:
            with builder.section(SectionKind.COMMIT, commit.hash, collapsible=False, payload=commit):
                builder.insert(commit.hash, Style.HASH)
                builder.insert(f" {commit.subject}\n")
        builder.insert("\n")


def insert_merge_log(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Commits a merge in progress would bring in."""
    if ctx.runner.value(["rev-parse", "-q", "--verify", "MERGE_HEAD"]) is None:
        return
    _insert_commits(builder, ctx, SectionKind.MERGE_LOG, "merge", "Merging", "HEAD..MERGE_HEAD")


def insert_untracked(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Untracked files."""
    lines = ctx.runner.lines(["status", "--porcelain", "--untracked-files=normal"])
    untracked = [record for record in parse_status_lines(lines, ctx.diagnostics) if record.untracked]
    if not untracked:
        return
    heading = f"Untracked files ({len(untracked)})\n"
    with builder.section(SectionKind.UNTRACKED_GROUP, "untracked", heading, heading_style=Style.SECTION_HEADING):
        for record in untracked:
            with builder.section(SectionKind.FILE, record.path, collapsible=False, payload=record):
                builder.insert(f"{record.path}\n")
        builder.insert("\n")


def insert_stashes(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Stash entries."""
    stashes = parse_stash_lines(ctx.runner.lines(["stash", "list", "--format=%gd: %gs"]), ctx.diagnostics)
    if not stashes:
        return
    heading = f"Stashes ({len(stashes)})\n"
    with builder.section(SectionKind.GENERIC, "stashes", heading, heading_style=Style.SECTION_HEADING):
        for stash in stashes:
            with builder.section(SectionKind.STASH, stash.ref, collapsible=False, payload=stash):
                builder.insert(format_stash(stash) + "\n")
        builder.insert("\n")


def _insert_file_diff(builder: SectionBuilder, file_diff: FileDiff) -> None:
    with builder.section(
        SectionKind.FILE,
        file_diff.path,
        format_file_diff_heading(file_diff),
        heading_style=Style.FILE_HEADER,
        payload=file_diff,
    ):
        for hunk in file_diff.hunks:
            with builder.section(
                SectionKind.HUNK,
                hunk.header,
                hunk.header + "\n",
                heading_style=Style.HUNK_HEADER,
                payload=hunk,
            ):
                for line in hunk.lines:
                    builder.insert(line.text + "\n", LINE_STYLES[line.kind] or None)


def _insert_diff(builder: SectionBuilder, ctx: RefreshContext, value: str, heading: str, args: List[str]) -> None:
    lines = ctx.runner.lines(["diff", "--no-color", "--no-ext-diff", *args])
    diffs = parse_diff(lines, ctx.diagnostics)
    if not diffs:
        return
    with builder.section(SectionKind.GENERIC, value, f"{heading} ({len(diffs)})\n", heading_style=Style.SECTION_HEADING):
        for file_diff in diffs:
            _insert_file_diff(builder, file_diff)
        builder.insert("\n")


def insert_unstaged(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Working tree changes not yet in the index."""
    _insert_diff(builder, ctx, "unstaged", "Unstaged changes", [])


def insert_staged(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Changes in the index."""
    _insert_diff(builder, ctx, "staged", "Staged changes", ["--cached"])


def insert_unpulled(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Upstream commits not merged into HEAD."""
    upstream = ctx.runner.value(["rev-parse", "--abbrev-ref", "@{upstream}"])
    if upstream is None:
        return
    _insert_commits(builder, ctx, SectionKind.GENERIC, "unpulled", f"Unpulled from {upstream}", "HEAD..@{upstream}")


def insert_unpushed(builder: SectionBuilder, ctx: RefreshContext) -> None:
    """Local commits not on the upstream branch."""
    upstream = ctx.runner.value(["rev-parse", "--abbrev-ref", "@{upstream}"])
    if upstream is None:
        return
    _insert_commits(builder, ctx, SectionKind.GENERIC, "unpushed", f"Unpushed to {upstream}", "@{upstream}..HEAD")


STATUS_INSERTERS: Dict[str, Callable[[SectionBuilder, RefreshContext], None]] = {
    "headers": insert_headers,
    "merge-log": insert_merge_log,
    "untracked": insert_untracked,
    "stashes": insert_stashes,
    "unstaged": insert_unstaged,
    "staged": insert_staged,
    "unpulled": insert_unpulled,
    "unpushed": insert_unpushed,
}


class StatusView(SectionView):
    """Section view of a repository's status."""

    title = "status"

    def default_inserters(self) -> List[Inserter]:
        return [STATUS_INSERTERS[name] for name in self.config.status_sections]

    def stash_at(self, offset: Optional[int] = None) -> Optional[StashRecord]:
        """Stash entry at ``offset`` (default: point)."""
        section = self.section_at(offset)
        return section.payload if section.kind == SectionKind.STASH else None

    def visit_target(self, offset: Optional[int] = None) -> Optional[VisitTarget]:
        """File position shown at ``offset`` (default: point).

        Inside a hunk this is the post-image line and column; on a file
        heading it is the top of the file. Elsewhere there is no target.
        """
        tree = self._require_tree()
        offset = self.point if offset is None else offset
        section: Optional[Section] = tree.section_at(offset)
        while section is not None and section.kind not in (SectionKind.HUNK, SectionKind.FILE):
            section = tree.parent_of(section)
        if section is None:
            return None

        if section.kind == SectionKind.FILE:
            return VisitTarget(path=section.value, line=1)

        hunk: HunkRecord = section.payload
        path = tree.parent_of(section).value
        if offset < section.body_span.start:
            return VisitTarget(path=path, line=max(hunk.new_start, 1))

        text = tree.text
        line = text.count("\n", section.body_span.start, offset) + 1
        newline = text.rfind("\n", section.body_span.start, offset)
        line_start = section.body_span.start if newline == -1 else newline + 1
        file_line, column = hunk_target(hunk.header, hunk.lines, line, offset - line_start)
        return VisitTarget(path=path, line=file_line, column=column)
