"""Line parsers for git output.

Each parser turns one line of tool output into a typed record and raises
MalformedLineError when the line does not follow its grammar. The
``parse_*_lines`` variants skip malformed lines and report them.
"""

from .common import parse_lines
from .branches import parse_branch_line, parse_branch_lines
from .tags import parse_tag_line, parse_tag_lines, parse_describe, parse_count
from .stashes import parse_stash_line, parse_stash_lines
from .status import parse_status_line, parse_status_lines
from .diff import parse_diff, parse_hunk_header, classify_line
from .log import parse_log_line, parse_log_lines, parse_cherry_line, parse_cherry_lines

__all__ = [
    "parse_lines",
    "parse_branch_line",
    "parse_branch_lines",
    "parse_tag_line",
    "parse_tag_lines",
    "parse_describe",
    "parse_count",
    "parse_stash_line",
    "parse_stash_lines",
    "parse_status_line",
    "parse_status_lines",
    "parse_diff",
    "parse_hunk_header",
    "classify_line",
    "parse_log_line",
    "parse_log_lines",
    "parse_cherry_line",
    "parse_cherry_lines",
]
