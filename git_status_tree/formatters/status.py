"""File status formatting utilities."""

from git_status_tree.models.records import FileDiff, FileStatusRecord

STATUS_LABELS = {
    "M": "Modified",
    "A": "New",
    "D": "Deleted",
    "R": "Renamed",
    "C": "Copied",
    "U": "Unmerged",
    "T": "Typechange",
    "?": "Untracked",
}

DIFF_STATUS_LABELS = {
    "modified": "Modified",
    "new file": "New",
    "deleted": "Deleted",
    "renamed": "Renamed",
    "binary": "Binary",
    "unmerged": "Unmerged",
}

LABEL_WIDTH = 11


def format_file_status(record: FileStatusRecord, staged: bool = False) -> str:
    """
    Format a porcelain entry as "Modified   path".

    Args:
        record: Porcelain status entry
        staged: Describe the index side instead of the working tree side
    """
    code = record.index_status if staged else record.worktree_status
    label = STATUS_LABELS.get(code, code)
    path = record.path
    if record.original_path and staged:
        path = f"{record.original_path} -> {record.path}"
    return f"{label:<{LABEL_WIDTH}}{path}"


def format_file_diff_heading(file_diff: FileDiff) -> str:
    """
    Format the heading of a file section in a diff.

    Example:
        "Modified   src/app.py"
        "Renamed    old.py -> new.py"
    """
    label = DIFF_STATUS_LABELS.get(file_diff.status, file_diff.status.capitalize())
    path = file_diff.path
    if file_diff.status == "renamed" and file_diff.old_path:
        path = f"{file_diff.old_path} -> {file_diff.path}"
    return f"{label:<{LABEL_WIDTH}}{path}\n"
