"""Source positions, spans, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of character offsets into the parsed source."""

    start: int
    end: int

    def slice(self, source: str) -> str:
        """Return the text of *source* covered by this span."""
        return source[self.start : self.end]


def position_at(source: str, offset: int) -> Position:
    """Compute the line/column of *offset* within *source*.

    Only called when a position is actually needed (error rendering,
    editor diagnostics), never while parsing.
    """
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)


# Horizontal whitespace as understood by the grammar (no line breaks)
_HSPACE = frozenset(" \t")


def is_hspace(ch: str) -> bool:
    """Return True if ch is a space or a tab."""
    return ch in _HSPACE


def is_tag_start_char(ch: str) -> bool:
    """Return True if ch may start a tag name (ASCII letter)."""
    return ch.isascii() and ch.isalpha()


def is_tag_char(ch: str) -> bool:
    """Return True if ch may continue a tag name (ASCII alphanumeric or '_')."""
    return (ch.isascii() and ch.isalnum()) or ch == "_"
