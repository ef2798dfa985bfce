"""Custom exceptions for git-status-tree"""

from typing import Optional, Sequence


class GitStatusTreeError(Exception):
    """Base exception for all git-status-tree errors."""
    pass


class GitCommandError(GitStatusTreeError):
    """Exception raised when a git invocation fails."""

    def __init__(self, args: Sequence[str], exit_code: int, message: Optional[str] = None):
        self.args_list = list(args)
        self.exit_code = exit_code
        self.message = message

        error_msg = f"git {' '.join(self.args_list)} failed with exit code {exit_code}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class MalformedLineError(GitStatusTreeError):
    """Exception raised when a line of git output does not match its grammar."""

    def __init__(self, kind: str, line: str, reason: Optional[str] = None):
        self.kind = kind
        self.line = line
        self.reason = reason

        error_msg = f"Malformed {kind} line: {line!r}"
        if reason:
            error_msg += f" ({reason})"

        super().__init__(error_msg)


class SectionError(GitStatusTreeError):
    """Exception raised when the section builder is misused."""
    pass


class UnbalancedSectionError(SectionError):
    """Exception raised when sections are not closed in stack order."""

    def __init__(self, message: str, key: Optional[tuple] = None):
        self.key = key
        super().__init__(message)


class WasherError(SectionError):
    """Exception raised (and contained) when a deferred section body fails to build."""

    def __init__(self, key: tuple, cause: BaseException):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to build section {format_key(key)}: {cause}")


class ScanIOError(GitStatusTreeError):
    """Exception raised when a directory cannot be read during a repository scan."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot scan directory '{path}': {cause}")


class MapperOutOfRangeError(GitStatusTreeError, IndexError):
    """Exception raised when a hunk position lies outside the hunk."""

    def __init__(self, line: int, line_count: int):
        self.line = line
        self.line_count = line_count
        super().__init__(f"Line {line} is outside the hunk (1..{line_count})")


def format_key(key: tuple) -> str:
    """Render a section key path as ``kind:value/kind:value``."""
    parts = []
    for kind, value in key:
        name = getattr(kind, "value", kind)
        parts.append(f"{name}:{value}" if value is not None else str(name))
    return "/".join(parts)
