"""Shared helpers for the line parsers."""

from typing import Callable, Iterable, List, Optional, TypeVar

from git_status_tree.exceptions import MalformedLineError
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def parse_lines(
    parse_line: Callable[[str], Optional[T]],
    lines: Iterable[str],
    diagnostics: Optional[List[str]] = None,
) -> List[T]:
    """Run a line parser over many lines, skipping the malformed ones.

    Lines the parser rejects are logged and reported through ``diagnostics``;
    a bad line never aborts the batch.
    """
    records: List[T] = []
    for line in lines:
        try:
            record = parse_line(line)
        except MalformedLineError as e:
            logger.warning(str(e))
            if diagnostics is not None:
                diagnostics.append(str(e))
            continue
        if record is not None:
            records.append(record)
    return records
