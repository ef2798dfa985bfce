"""Rendered output: plain text plus styled spans."""

from dataclasses import dataclass
from typing import List, Optional

from rich.text import Text


@dataclass(frozen=True)
class StyledSpan:
    """A style applied to the half-open range [start, end)."""
    start: int
    end: int
    style: str


class RenderedBuffer:
    """Append-mostly text buffer that remembers the style of each write."""

    def __init__(self, plain: str = "", spans: Optional[List[StyledSpan]] = None):
        self._parts: List[str] = [plain] if plain else []
        self._length = len(plain)
        self._plain: Optional[str] = plain
        self.spans: List[StyledSpan] = list(spans or [])

    def __len__(self) -> int:
        return self._length

    @property
    def plain(self) -> str:
        if self._plain is None:
            self._plain = "".join(self._parts)
            self._parts = [self._plain] if self._plain else []
        return self._plain

    def append(self, text: str, style: Optional[str] = None) -> int:
        """Append text and return the offset it starts at."""
        start = self._length
        if not text:
            return start
        self._parts.append(text)
        self._length += len(text)
        self._plain = None
        if style:
            self.spans.append(StyledSpan(start, self._length, style))
        return start

    def truncate(self, length: int) -> None:
        """Drop everything from ``length`` on."""
        if length >= self._length:
            return
        plain = self.plain[:length]
        self._parts = [plain] if plain else []
        self._plain = plain
        self._length = length
        spans = []
        for span in self.spans:
            if span.start >= length:
                continue
            spans.append(StyledSpan(span.start, min(span.end, length), span.style))
        self.spans = spans

    def splice(self, position: int, other: "RenderedBuffer") -> None:
        """Insert ``other`` at ``position``, shifting later styles."""
        if not len(other):
            return
        delta = len(other)
        plain = self.plain
        spliced = plain[:position] + other.plain + plain[position:]
        spans = []
        for span in self.spans:
            start = span.start + delta if span.start >= position else span.start
            end = span.end + delta if span.end > position or (span.end == position and span.start >= position) else span.end
            spans.append(StyledSpan(start, end, span.style))
        spans.extend(StyledSpan(s.start + position, s.end + position, s.style) for s in other.spans)
        spans.sort(key=lambda s: (s.start, s.end))
        self._parts = [spliced]
        self._plain = spliced
        self._length = len(spliced)
        self.spans = spans

    def slice(self, start: int, end: int) -> str:
        return self.plain[start:end]

    def to_text(self, start: int = 0, end: Optional[int] = None) -> Text:
        """Convert the range [start, end) to a rich Text."""
        if end is None:
            end = self._length
        text = Text(self.plain[start:end])
        for span in self.spans:
            if span.end <= start or span.start >= end:
                continue
            text.stylize(span.style, max(span.start, start) - start, min(span.end, end) - start)
        return text
