"""Read-only view of one source file, addressable by offset, line and column."""

from __future__ import annotations

from bisect import bisect_right

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_SOURCE_SIZE = 10_000_000  # 10M characters


class SourceSafetyError(Exception):
    """Raised when a source text is too large to analyse."""


class SourceText:
    """Immutable text with precomputed line starts.

    Lines and columns are 1-based; offsets are 0-based indexes into ``text``.
    """

    __slots__ = ("_line_starts", "_text")

    def __init__(self, text: str) -> None:
        if len(text) > _MAX_SOURCE_SIZE:
            raise SourceSafetyError(
                f"Source exceeds maximum size "
                f"({len(text):,} chars > {_MAX_SOURCE_SIZE:,} limit)"
            )
        self._text = text
        starts = [0]
        pos = text.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        self._line_starts = starts

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_of(self, offset: int) -> int:
        """1-based line number containing *offset*."""
        return bisect_right(self._line_starts, offset)

    def column_of(self, offset: int) -> int:
        """1-based column of *offset* within its line."""
        return offset - self.line_start(self.line_of(offset)) + 1

    def line_start(self, line: int) -> int:
        return self._line_starts[line - 1]

    def line_end(self, offset: int) -> int:
        """Offset of the newline ending the line at *offset* (or end of text)."""
        end = self._text.find("\n", offset)
        return len(self._text) if end == -1 else end

    def line(self, line: int) -> str:
        """Text of the given 1-based line, without its newline."""
        start = self.line_start(line)
        return self._text[start : self.line_end(start)]

    def with_insertion(self, offset: int, insert: str) -> SourceText:
        """Return a new SourceText with *insert* placed at *offset*."""
        return SourceText(self._text[:offset] + insert + self._text[offset:])

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"SourceText(<{len(self._text)} chars, {self.line_count} lines>)"
